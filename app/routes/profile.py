# app/routes/profile.py
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.core.security import hash_password, verify_password
from app.db.session import get_db
from app.models.user import User
from app.schemas.users import ChangePasswordIn, ProfileUpdate, UserOut

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
def get_profile(user: User = Depends(get_current_user)):
    return {"user": UserOut.model_validate(user).model_dump(mode="json")}


@router.put("")
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if payload.user_full_name is not None:
        user.user_full_name = payload.user_full_name
    if payload.user_description is not None:
        user.user_description = payload.user_description

    if payload.user_email is not None:
        email = payload.user_email.strip().lower()
        taken = (
            db.query(User)
            .filter(User.user_email == email)
            .filter(User.user_is_deleted.is_(False))
            .filter(User.user_id != user.user_id)
            .first()
        )
        if taken:
            raise HTTPException(status_code=400, detail="Email already exists")
        user.user_email = email

    user.user_last_update = datetime.utcnow()
    db.add(user)
    db.commit()
    db.refresh(user)
    return {"user": UserOut.model_validate(user).model_dump(mode="json")}


@router.put("/password")
def change_password(
    payload: ChangePasswordIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if payload.new_password != payload.confirm_password:
        raise HTTPException(status_code=400, detail="New password and confirm password do not match")

    if len(payload.new_password) < 6:
        raise HTTPException(status_code=400, detail="New password must be at least 6 characters")

    if not user.user_password:
        raise HTTPException(status_code=404, detail="User not found")

    # same dual-scheme check as login, so legacy SHA1 accounts can change too
    if not verify_password(payload.current_password, user.user_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user.user_password = hash_password(payload.new_password)
    user.user_last_update = datetime.utcnow()
    db.add(user)
    db.commit()

    return {"success": True, "message": "Password updated successfully"}

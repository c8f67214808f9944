# app/routes/users.py
import re
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.core.security import hash_password
from app.db.session import get_db
from app.models.user import User
from app.schemas.users import UserCreate, UserOut, UserUpdate
from app.services.pagination import paginate

router = APIRouter(prefix="/api/users", tags=["users"])

USERNAME_RE = re.compile(r"^[a-z0-9_-]+$")


def normalize_username(raw: str) -> str:
    username = (raw or "").strip().lower()
    if len(username) < 3 or len(username) > 30:
        raise HTTPException(status_code=400, detail="Username must be between 3 and 30 characters")
    if not USERNAME_RE.match(username):
        raise HTTPException(
            status_code=400,
            detail="Username can only contain letters, numbers, underscores, and hyphens",
        )
    return username


def _out(u: User) -> dict:
    return UserOut.model_validate(u).model_dump(mode="json")


def _live_users(db: Session):
    return db.query(User).filter(User.user_is_deleted.is_(False))


def _get_or_404(db: Session, user_id: int) -> User:
    u = db.get(User, user_id)
    if not u or u.user_is_deleted:
        raise HTTPException(status_code=404, detail="User not found")
    return u


@router.get("")
def list_users(
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    q = _live_users(db)
    if search:
        like = f"%{search}%"
        q = q.filter(or_(User.user_full_name.like(like), User.user_email.like(like)))

    users, pagination = paginate(q.order_by(User.user_id.desc()), page, limit)
    return {"users": [_out(u) for u in users], "pagination": pagination}


@router.post("", status_code=201)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    username = normalize_username(payload.username)
    email = payload.user_email.strip().lower()

    exists = _live_users(db).filter(or_(User.user_email == email, User.username == username)).first()
    if exists:
        raise HTTPException(status_code=400, detail="Email or Username already exists")

    u = User(
        username=username,
        user_email=email,
        user_password=hash_password(payload.user_password),
        user_full_name=payload.user_full_name,
        user_description=payload.user_description,
        user_role_role_id=payload.user_role_role_id,
        user_is_deleted=False,
        user_input_date=datetime.utcnow(),
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return {"user": _out(u)}


@router.get("/{user_id}")
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    return {"user": _out(_get_or_404(db, user_id))}


@router.put("/{user_id}")
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    u = _get_or_404(db, user_id)

    if payload.username is not None:
        username = normalize_username(payload.username)
        taken = _live_users(db).filter(User.username == username, User.user_id != user_id).first()
        if taken:
            raise HTTPException(status_code=400, detail="Username already exists")
        u.username = username

    if payload.user_email is not None:
        email = payload.user_email.strip().lower()
        taken = _live_users(db).filter(User.user_email == email, User.user_id != user_id).first()
        if taken:
            raise HTTPException(status_code=400, detail="Email already exists")
        u.user_email = email

    if payload.user_full_name is not None:
        u.user_full_name = payload.user_full_name
    if payload.user_description is not None:
        u.user_description = payload.user_description
    if payload.user_role_role_id is not None:
        u.user_role_role_id = payload.user_role_role_id
    if payload.user_password:
        u.user_password = hash_password(payload.user_password)

    u.user_last_update = datetime.utcnow()
    db.add(u)
    db.commit()
    db.refresh(u)
    return {"user": _out(u)}


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_user),
):
    u = _get_or_404(db, user_id)
    if u.user_id == admin.user_id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    # soft delete: the row stays for payment history
    u.user_is_deleted = True
    u.user_last_update = datetime.utcnow()
    db.add(u)
    db.commit()
    return {"success": True}

# app/routes/seed_admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.deps import settings_from_app
from app.core.security import hash_password
from app.db.session import get_db
from app.models.payment import Month
from app.models.user import Role, User

router = APIRouter(prefix="/seed", tags=["seed"])

ADMIN_ROLE_NAME = "Administrator"

# Academic year runs July to June.
MONTH_NAMES = [
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
]


@router.post("/admin")
def seed_admin(db: Session = Depends(get_db), settings: Settings = Depends(settings_from_app)):
    # local only
    if not settings.is_local:
        return {"ok": False, "detail": "disabled"}

    email = "admin@sekolah.sch.id"
    password = "Admin123*"
    username = "admin"

    role = db.query(Role).filter(Role.role_name == ADMIN_ROLE_NAME).first()
    if not role:
        role = Role(role_name=ADMIN_ROLE_NAME)
        db.add(role)
        db.flush()

    if db.query(Month).count() == 0:
        db.add_all([Month(month_name=name) for name in MONTH_NAMES])

    exists = db.query(User).filter(User.user_email == email).first()
    if exists:
        db.commit()
        return {"ok": True, "detail": "admin exists", "email": email}

    u = User(
        username=username,
        user_email=email,
        user_password=hash_password(password),
        user_full_name="Administrator",
        user_role_role_id=role.role_id,
        user_is_deleted=False,
    )
    db.add(u)
    db.commit()
    db.refresh(u)

    return {"ok": True, "email": email, "password": password, "id": u.user_id}

# app/routes/settings.py
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.db.session import get_db
from app.models.admin import Setting
from app.models.user import User
from app.schemas.setting import SettingOut, SettingUpsert

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _out(s: Setting) -> dict:
    return SettingOut.model_validate(s).model_dump(mode="json")


def _get_or_404(db: Session, setting_id: int) -> Setting:
    s = db.get(Setting, setting_id)
    if not s:
        raise HTTPException(status_code=404, detail="Setting not found")
    return s


@router.get("")
def list_settings(
    name: str | None = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    if name:
        s = db.query(Setting).filter(Setting.setting_name == name).first()
        if not s:
            raise HTTPException(status_code=404, detail="Setting not found")
        return {"setting": _out(s)}

    settings = db.query(Setting).order_by(Setting.setting_name.asc()).all()
    return {"settings": [_out(s) for s in settings]}


@router.post("")
def upsert_setting(
    payload: SettingUpsert,
    response: Response,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    """Create the setting, or overwrite its value when the name already exists."""
    name = (payload.setting_name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Setting name is required")

    s = db.query(Setting).filter(Setting.setting_name == name).first()
    if s:
        s.setting_value = payload.setting_value
        s.setting_last_update = datetime.utcnow()
        response.status_code = 200
    else:
        s = Setting(
            setting_name=name,
            setting_value=payload.setting_value,
            setting_last_update=datetime.utcnow(),
        )
        db.add(s)
        response.status_code = 201

    db.commit()
    db.refresh(s)
    return {"setting": _out(s)}


@router.get("/{setting_id}")
def get_setting(setting_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    return {"setting": _out(_get_or_404(db, setting_id))}


@router.put("/{setting_id}")
def update_setting(
    setting_id: int,
    payload: SettingUpsert,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    s = _get_or_404(db, setting_id)

    if payload.setting_name is not None:
        name = payload.setting_name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Setting name is required")
        s.setting_name = name
    if payload.setting_value is not None:
        s.setting_value = payload.setting_value

    s.setting_last_update = datetime.utcnow()
    db.commit()
    db.refresh(s)
    return {"setting": _out(s)}


@router.delete("/{setting_id}")
def delete_setting(setting_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    s = _get_or_404(db, setting_id)
    db.delete(s)
    db.commit()
    return {"success": True}

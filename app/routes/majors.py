# app/routes/majors.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.db.session import get_db
from app.models.student import Major, Student
from app.models.user import User
from app.schemas.academic import MajorIn, MajorOut

router = APIRouter(prefix="/api/majors", tags=["majors"])


def _out(m: Major) -> dict:
    return MajorOut.model_validate(m).model_dump()


def _get_or_404(db: Session, majors_id: int) -> Major:
    m = db.get(Major, majors_id)
    if not m:
        raise HTTPException(status_code=404, detail="Major not found")
    return m


@router.get("")
def list_majors(db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    majors = db.query(Major).order_by(Major.majors_name.asc()).all()
    return {"majors": [_out(m) for m in majors]}


@router.post("", status_code=201)
def create_major(payload: MajorIn, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    name = (payload.majors_name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Missing required fields")

    m = Major(majors_name=name, majors_short_name=payload.majors_short_name)
    db.add(m)
    db.commit()
    db.refresh(m)
    return {"major": _out(m)}


@router.get("/{majors_id}")
def get_major(majors_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    return {"major": _out(_get_or_404(db, majors_id))}


@router.put("/{majors_id}")
def update_major(
    majors_id: int,
    payload: MajorIn,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    m = _get_or_404(db, majors_id)
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    for field, value in changes.items():
        setattr(m, field, value)
    db.commit()
    db.refresh(m)
    return {"major": _out(m)}


@router.delete("/{majors_id}")
def delete_major(majors_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    m = _get_or_404(db, majors_id)

    in_use = db.query(Student).filter(Student.majors_majors_id == majors_id).count()
    if in_use > 0:
        raise HTTPException(status_code=400, detail="Cannot delete major with existing students")

    db.delete(m)
    db.commit()
    return {"success": True}

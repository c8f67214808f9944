# app/routes/classes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.db.session import get_db
from app.models.student import SchoolClass, Student
from app.models.user import User
from app.schemas.academic import ClassIn, ClassOut

router = APIRouter(prefix="/api/classes", tags=["classes"])


def _out(c: SchoolClass) -> dict:
    return ClassOut.model_validate(c).model_dump()


def _get_or_404(db: Session, class_id: int) -> SchoolClass:
    c = db.get(SchoolClass, class_id)
    if not c:
        raise HTTPException(status_code=404, detail="Class not found")
    return c


@router.get("")
def list_classes(db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    classes = db.query(SchoolClass).order_by(SchoolClass.class_name.asc()).all()
    return {"classes": [_out(c) for c in classes]}


@router.post("", status_code=201)
def create_class(payload: ClassIn, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    name = (payload.class_name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Missing required fields")

    c = SchoolClass(class_name=name)
    db.add(c)
    db.commit()
    db.refresh(c)
    return {"class": _out(c)}


@router.get("/{class_id}")
def get_class(class_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    return {"class": _out(_get_or_404(db, class_id))}


@router.put("/{class_id}")
def update_class(
    class_id: int,
    payload: ClassIn,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    c = _get_or_404(db, class_id)
    name = (payload.class_name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Missing required fields")

    c.class_name = name
    db.commit()
    db.refresh(c)
    return {"class": _out(c)}


@router.delete("/{class_id}")
def delete_class(class_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    c = _get_or_404(db, class_id)

    in_use = db.query(Student).filter(Student.class_class_id == class_id).count()
    if in_use > 0:
        raise HTTPException(status_code=400, detail="Cannot delete class with existing students")

    db.delete(c)
    db.commit()
    return {"success": True}

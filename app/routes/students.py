# app/routes/students.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.core.security import hash_password
from app.db.session import get_db
from app.models.student import Student
from app.models.user import User
from app.schemas.students import StudentCreate, StudentOut, StudentUpdate
from app.services.pagination import paginate

router = APIRouter(prefix="/api/students", tags=["students"])

# Initial password handed to students created without one.
DEFAULT_STUDENT_PASSWORD = "password123"


def _out(s: Student) -> dict:
    return StudentOut.model_validate(s).model_dump(mode="json")


def _get_or_404(db: Session, student_id: int) -> Student:
    s = db.get(Student, student_id)
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    return s


@router.get("")
def list_students(
    page: int = 1,
    limit: int = 10,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    q = db.query(Student).filter(Student.student_status.is_(True)).order_by(Student.student_id.desc())
    students, pagination = paginate(q, page, limit)
    return {"students": [_out(s) for s in students], "pagination": pagination}


@router.post("", status_code=201)
def create_student(
    payload: StudentCreate,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    nis = payload.student_nis.strip()
    if not nis:
        raise HTTPException(status_code=400, detail="NIS is required")

    exists = db.query(Student).filter(Student.student_nis == nis, Student.student_status.is_(True)).first()
    if exists:
        raise HTTPException(status_code=400, detail="NIS already exists")

    s = Student(
        student_nis=nis,
        student_nisn=payload.student_nisn,
        student_password=hash_password(payload.student_password or DEFAULT_STUDENT_PASSWORD),
        student_full_name=payload.student_full_name,
        student_gender=payload.student_gender,
        class_class_id=payload.class_class_id,
        majors_majors_id=payload.majors_majors_id,
        student_status=True,
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return {"student": _out(s)}


@router.get("/{student_id}")
def get_student(
    student_id: int,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    return {"student": _out(_get_or_404(db, student_id))}


@router.put("/{student_id}")
def update_student(
    student_id: int,
    payload: StudentUpdate,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    s = _get_or_404(db, student_id)
    data = payload.model_dump(exclude_unset=True)

    if "student_nis" in data:
        data["student_nis"] = (data["student_nis"] or "").strip()
        if not data["student_nis"]:
            raise HTTPException(status_code=400, detail="NIS is required")

    nis = data.get("student_nis", s.student_nis)
    active = data.get("student_status", s.student_status)
    if active and (nis != s.student_nis or not s.student_status):
        taken = (
            db.query(Student)
            .filter(
                Student.student_nis == nis,
                Student.student_status.is_(True),
                Student.student_id != student_id,
            )
            .first()
        )
        if taken:
            raise HTTPException(status_code=400, detail="NIS already exists")

    for field, value in data.items():
        setattr(s, field, value)

    db.add(s)
    db.commit()
    db.refresh(s)
    return {"student": _out(s)}


@router.delete("/{student_id}")
def delete_student(
    student_id: int,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    s = _get_or_404(db, student_id)
    # soft delete: bills keep pointing at the student
    s.student_status = False
    db.add(s)
    db.commit()
    return {"success": True}

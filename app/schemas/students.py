# app/schemas/students.py
from typing import Optional

from pydantic import BaseModel

from app.schemas.academic import ClassOut, MajorOut


class StudentCreate(BaseModel):
    student_nis: str
    student_full_name: str
    student_nisn: Optional[str] = None
    student_password: Optional[str] = None
    student_gender: Optional[str] = None
    class_class_id: Optional[int] = None
    majors_majors_id: Optional[int] = None


class StudentUpdate(BaseModel):
    student_nis: Optional[str] = None
    student_nisn: Optional[str] = None
    student_full_name: Optional[str] = None
    student_gender: Optional[str] = None
    class_class_id: Optional[int] = None
    majors_majors_id: Optional[int] = None
    student_status: Optional[bool] = None


class StudentOut(BaseModel):
    student_id: int
    student_nis: Optional[str] = None
    student_nisn: Optional[str] = None
    student_full_name: Optional[str] = None
    student_gender: Optional[str] = None
    student_img: Optional[str] = None
    student_status: bool
    class_class_id: Optional[int] = None
    majors_majors_id: Optional[int] = None
    school_class: Optional[ClassOut] = None
    major: Optional[MajorOut] = None

    model_config = {"from_attributes": True}

# app/models/student.py
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class SchoolClass(Base):
    __tablename__ = "class"

    class_id = Column(Integer, primary_key=True)
    class_name = Column(String(100), nullable=False)


class Major(Base):
    __tablename__ = "majors"

    majors_id = Column(Integer, primary_key=True)
    majors_name = Column(String(100), nullable=False)
    majors_short_name = Column(String(30), nullable=True)


class Student(Base):
    __tablename__ = "students"

    student_id = Column(Integer, primary_key=True)
    student_nis = Column(String(30), nullable=True, index=True)
    student_nisn = Column(String(30), nullable=True)
    student_password = Column(String(255), nullable=True)
    student_full_name = Column(String(255), nullable=True)
    student_gender = Column(String(1), nullable=True)  # L | P
    student_img = Column(String(255), nullable=True)

    # false = soft-deleted / inactive
    student_status = Column(Boolean, nullable=False, default=True)

    class_class_id = Column(Integer, ForeignKey("class.class_id"), nullable=True)
    majors_majors_id = Column(Integer, ForeignKey("majors.majors_id"), nullable=True)

    school_class = relationship("SchoolClass")
    major = relationship("Major")

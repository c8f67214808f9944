# app/models/employee.py
from sqlalchemy import Column, Integer, String

from app.db.base import Base


class Employee(Base):
    """Teachers log in with their NIP."""

    __tablename__ = "employee"

    employee_id = Column(Integer, primary_key=True)
    nip = Column(String(30), nullable=True, index=True)
    employee_full_name = Column(String(255), nullable=True)

    # Older imports wrote the hash to employee_password instead of password.
    password = Column(String(255), nullable=True)
    employee_password = Column(String(255), nullable=True)

    # 1 = active
    employee_status = Column(Integer, nullable=False, default=1)

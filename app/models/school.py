# app/models/school.py
from sqlalchemy import Column, DateTime, Integer, String

from app.db.base import Base


class School(Base):
    """A tenant: one school served under its own domain."""

    __tablename__ = "school"

    id = Column(Integer, primary_key=True)
    domain = Column(String(255), unique=True, nullable=False, index=True)
    school_name = Column(String(255), nullable=False)
    logo_url = Column(String(500), nullable=True)
    primary_color = Column(String(30), nullable=True)
    deleted_at = Column(DateTime(timezone=False), nullable=True)

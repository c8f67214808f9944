# app/models/admin.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.db.base import Base


class Period(Base):
    __tablename__ = "period"

    period_id = Column(Integer, primary_key=True)
    period_start = Column(Integer, nullable=False)
    period_end = Column(Integer, nullable=False)
    # only one period is active at a time
    period_status = Column(Boolean, nullable=False, default=False)


class Setting(Base):
    __tablename__ = "setting"

    setting_id = Column(Integer, primary_key=True)
    setting_name = Column(String(100), nullable=False, index=True)
    setting_value = Column(Text, nullable=True)
    setting_last_update = Column(DateTime(timezone=False), nullable=True)


class Pos(Base):
    """Payment heading (SPP, uang gedung, ...)."""

    __tablename__ = "pos"

    pos_id = Column(Integer, primary_key=True)
    pos_name = Column(String(100), nullable=False)
    pos_description = Column(String(255), nullable=True)

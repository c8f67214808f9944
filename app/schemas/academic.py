# app/schemas/academic.py
from typing import Optional

from pydantic import BaseModel


class ClassIn(BaseModel):
    class_name: Optional[str] = None


class ClassOut(BaseModel):
    class_id: int
    class_name: str

    model_config = {"from_attributes": True}


class MajorIn(BaseModel):
    majors_name: Optional[str] = None
    majors_short_name: Optional[str] = None


class MajorOut(BaseModel):
    majors_id: int
    majors_name: str
    majors_short_name: Optional[str] = None

    model_config = {"from_attributes": True}


class PeriodCreate(BaseModel):
    period_start: int
    period_end: int
    period_status: bool = False


class PeriodUpdate(BaseModel):
    period_start: Optional[int] = None
    period_end: Optional[int] = None
    period_status: Optional[bool] = None


class PeriodOut(BaseModel):
    period_id: int
    period_start: int
    period_end: int
    period_status: bool

    model_config = {"from_attributes": True}

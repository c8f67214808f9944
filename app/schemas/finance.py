# app/schemas/finance.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from app.schemas.academic import PeriodOut


class PosIn(BaseModel):
    pos_name: Optional[str] = None
    pos_description: Optional[str] = None


class PosOut(BaseModel):
    pos_id: int
    pos_name: str
    pos_description: Optional[str] = None

    model_config = {"from_attributes": True}


class PaymentCreate(BaseModel):
    payment_type: Literal["BULAN", "BEBAS"]
    period_period_id: int
    pos_pos_id: int


class PaymentOut(BaseModel):
    payment_id: int
    payment_type: str
    period_period_id: Optional[int] = None
    pos_pos_id: Optional[int] = None
    period: Optional[PeriodOut] = None
    pos: Optional[PosOut] = None

    model_config = {"from_attributes": True}


class StudentBrief(BaseModel):
    student_id: int
    student_nis: Optional[str] = None
    student_full_name: Optional[str] = None

    model_config = {"from_attributes": True}


class MonthOut(BaseModel):
    month_id: int
    month_name: str

    model_config = {"from_attributes": True}


class BulanCreate(BaseModel):
    student_student_id: int
    payment_payment_id: int
    month_month_id: int
    bulan_bill: Optional[float] = None
    bulan_status: bool = False
    bulan_number_pay: Optional[str] = None
    bulan_date_pay: Optional[datetime] = None
    user_user_id: Optional[int] = None


class BulanUpdate(BaseModel):
    student_student_id: Optional[int] = None
    payment_payment_id: Optional[int] = None
    month_month_id: Optional[int] = None
    bulan_bill: Optional[float] = None
    bulan_status: Optional[bool] = None
    bulan_number_pay: Optional[str] = None
    bulan_date_pay: Optional[datetime] = None
    user_user_id: Optional[int] = None


class BulanOut(BaseModel):
    bulan_id: int
    student_student_id: Optional[int] = None
    payment_payment_id: Optional[int] = None
    month_month_id: Optional[int] = None
    bulan_bill: Optional[float] = None
    bulan_status: bool
    bulan_number_pay: Optional[str] = None
    bulan_date_pay: Optional[datetime] = None
    user_user_id: Optional[int] = None
    bulan_input_date: Optional[datetime] = None
    bulan_last_update: Optional[datetime] = None
    student: Optional[StudentBrief] = None
    payment: Optional[PaymentOut] = None
    month: Optional[MonthOut] = None

    model_config = {"from_attributes": True}


class BebasCreate(BaseModel):
    student_student_id: int
    payment_payment_id: int
    bebas_bill: Optional[float] = None
    bebas_total_pay: float = 0


class BebasUpdate(BaseModel):
    student_student_id: Optional[int] = None
    payment_payment_id: Optional[int] = None
    bebas_bill: Optional[float] = None
    bebas_total_pay: Optional[float] = None


class BebasPayOut(BaseModel):
    bebas_pay_id: int
    bebas_pay_bill: Optional[float] = None
    bebas_pay_number: Optional[str] = None
    bebas_pay_desc: Optional[str] = None
    user_user_id: Optional[int] = None
    bebas_pay_input_date: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BebasOut(BaseModel):
    bebas_id: int
    student_student_id: Optional[int] = None
    payment_payment_id: Optional[int] = None
    bebas_bill: Optional[float] = None
    bebas_total_pay: float = 0
    bebas_input_date: Optional[datetime] = None
    bebas_last_update: Optional[datetime] = None
    student: Optional[StudentBrief] = None
    payment: Optional[PaymentOut] = None
    bebas_pays: List[BebasPayOut] = []

    model_config = {"from_attributes": True}

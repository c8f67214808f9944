# app/models/payment.py
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class Payment(Base):
    __tablename__ = "payment"

    payment_id = Column(Integer, primary_key=True)
    payment_type = Column(String(10), nullable=False)  # BULAN | BEBAS
    period_period_id = Column(Integer, ForeignKey("period.period_id"), nullable=True)
    pos_pos_id = Column(Integer, ForeignKey("pos.pos_id"), nullable=True)

    period = relationship("Period")
    pos = relationship("Pos")


class Month(Base):
    __tablename__ = "month"

    month_id = Column(Integer, primary_key=True)
    month_name = Column(String(30), nullable=False)


class Bulan(Base):
    """Monthly bill of a student for one payment."""

    __tablename__ = "bulan"

    bulan_id = Column(Integer, primary_key=True)
    student_student_id = Column(Integer, ForeignKey("students.student_id"), nullable=True)
    payment_payment_id = Column(Integer, ForeignKey("payment.payment_id"), nullable=True)
    month_month_id = Column(Integer, ForeignKey("month.month_id"), nullable=True)
    bulan_bill = Column(Float, nullable=True)
    bulan_status = Column(Boolean, nullable=False, default=False)
    bulan_number_pay = Column(String(50), nullable=True)
    bulan_date_pay = Column(DateTime(timezone=False), nullable=True)
    user_user_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    bulan_input_date = Column(DateTime(timezone=False), server_default=func.now(), nullable=True)
    bulan_last_update = Column(DateTime(timezone=False), nullable=True)

    student = relationship("Student")
    payment = relationship("Payment")
    month = relationship("Month")
    user = relationship("User")


class Bebas(Base):
    """Free-installment bill: paid in any number of BebasPay parts."""

    __tablename__ = "bebas"

    bebas_id = Column(Integer, primary_key=True)
    student_student_id = Column(Integer, ForeignKey("students.student_id"), nullable=True)
    payment_payment_id = Column(Integer, ForeignKey("payment.payment_id"), nullable=True)
    bebas_bill = Column(Float, nullable=True)
    bebas_total_pay = Column(Float, nullable=False, default=0)
    bebas_input_date = Column(DateTime(timezone=False), server_default=func.now(), nullable=True)
    bebas_last_update = Column(DateTime(timezone=False), nullable=True)

    student = relationship("Student")
    payment = relationship("Payment")
    bebas_pays = relationship("BebasPay", back_populates="bebas")


class BebasPay(Base):
    __tablename__ = "bebas_pay"

    bebas_pay_id = Column(Integer, primary_key=True)
    bebas_bebas_id = Column(Integer, ForeignKey("bebas.bebas_id"), nullable=False)
    bebas_pay_bill = Column(Float, nullable=True)
    bebas_pay_number = Column(String(50), nullable=True)
    bebas_pay_desc = Column(String(255), nullable=True)
    user_user_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    bebas_pay_input_date = Column(DateTime(timezone=False), server_default=func.now(), nullable=True)

    bebas = relationship("Bebas", back_populates="bebas_pays")
    user = relationship("User")

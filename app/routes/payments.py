# app/routes/payments.py
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.db.session import get_db
from app.models.admin import Period, Pos
from app.models.payment import Bebas, BebasPay, Bulan, Payment
from app.models.student import Student
from app.models.user import User
from app.schemas.finance import (
    BebasCreate,
    BebasOut,
    BebasUpdate,
    BulanCreate,
    BulanOut,
    BulanUpdate,
    PaymentCreate,
    PaymentOut,
)
from app.services.pagination import paginate

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _dump(schema, row) -> dict:
    return schema.model_validate(row).model_dump(mode="json")


def _require_refs(db: Session, student_id: int | None, payment_id: int | None) -> None:
    if student_id is not None and not db.get(Student, student_id):
        raise HTTPException(status_code=400, detail="Student not found")
    if payment_id is not None and not db.get(Payment, payment_id):
        raise HTTPException(status_code=400, detail="Payment not found")


# =========================================================
# Payment (type + period + pos)
# =========================================================
@router.get("")
def list_payments(
    page: int = 1,
    limit: int = 10,
    studentId: int | None = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    q = db.query(Payment)
    if studentId is not None:
        # a payment belongs to a student through its bills
        billed = select(Bulan.payment_payment_id).where(Bulan.student_student_id == studentId)
        billed_bebas = select(Bebas.payment_payment_id).where(Bebas.student_student_id == studentId)
        q = q.filter(or_(Payment.payment_id.in_(billed), Payment.payment_id.in_(billed_bebas)))

    payments, pagination = paginate(q.order_by(Payment.payment_id.desc()), page, limit)
    return {"payments": [_dump(PaymentOut, p) for p in payments], "pagination": pagination}


@router.post("", status_code=201)
def create_payment(payload: PaymentCreate, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    if not db.get(Period, payload.period_period_id):
        raise HTTPException(status_code=400, detail="Period not found")
    if not db.get(Pos, payload.pos_pos_id):
        raise HTTPException(status_code=400, detail="Pos not found")

    p = Payment(
        payment_type=payload.payment_type,
        period_period_id=payload.period_period_id,
        pos_pos_id=payload.pos_pos_id,
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return {"payment": _dump(PaymentOut, p)}


# =========================================================
# Bulan (monthly bills)
# =========================================================
def _bulan_or_404(db: Session, bulan_id: int) -> Bulan:
    b = db.get(Bulan, bulan_id)
    if not b:
        raise HTTPException(status_code=404, detail="Bulan payment not found")
    return b


@router.get("/bulan")
def list_bulan(
    studentId: int | None = None,
    paymentId: int | None = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    q = db.query(Bulan)
    if studentId is not None:
        q = q.filter(Bulan.student_student_id == studentId)
    if paymentId is not None:
        q = q.filter(Bulan.payment_payment_id == paymentId)

    bills = q.order_by(Bulan.bulan_id.desc()).all()
    return {"payments": [_dump(BulanOut, b) for b in bills]}


@router.post("/bulan", status_code=201)
def create_bulan(payload: BulanCreate, db: Session = Depends(get_db), admin: User = Depends(get_current_user)):
    _require_refs(db, payload.student_student_id, payload.payment_payment_id)

    b = Bulan(**payload.model_dump())
    if b.bulan_status and b.user_user_id is None:
        b.user_user_id = admin.user_id
    db.add(b)
    db.commit()
    db.refresh(b)
    return {"payment": _dump(BulanOut, b)}


@router.get("/bulan/{bulan_id}")
def get_bulan(bulan_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    return {"payment": _dump(BulanOut, _bulan_or_404(db, bulan_id))}


@router.put("/bulan/{bulan_id}")
def update_bulan(
    bulan_id: int,
    payload: BulanUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_user),
):
    b = _bulan_or_404(db, bulan_id)
    changes = payload.model_dump(exclude_unset=True)
    _require_refs(db, changes.get("student_student_id"), changes.get("payment_payment_id"))

    for field, value in changes.items():
        setattr(b, field, value)
    if b.bulan_status and b.user_user_id is None:
        b.user_user_id = admin.user_id
    b.bulan_last_update = datetime.utcnow()

    db.commit()
    db.refresh(b)
    return {"payment": _dump(BulanOut, b)}


@router.delete("/bulan/{bulan_id}")
def delete_bulan(bulan_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    b = _bulan_or_404(db, bulan_id)
    db.delete(b)
    db.commit()
    return {"success": True}


# =========================================================
# Bebas (free-installment bills)
# =========================================================
def _bebas_or_404(db: Session, bebas_id: int) -> Bebas:
    b = db.get(Bebas, bebas_id)
    if not b:
        raise HTTPException(status_code=404, detail="Bebas payment not found")
    return b


@router.get("/bebas")
def list_bebas(
    studentId: int | None = None,
    paymentId: int | None = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    q = db.query(Bebas)
    if studentId is not None:
        q = q.filter(Bebas.student_student_id == studentId)
    if paymentId is not None:
        q = q.filter(Bebas.payment_payment_id == paymentId)

    bills = q.order_by(Bebas.bebas_id.desc()).all()
    return {"payments": [_dump(BebasOut, b) for b in bills]}


@router.post("/bebas", status_code=201)
def create_bebas(payload: BebasCreate, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    _require_refs(db, payload.student_student_id, payload.payment_payment_id)

    b = Bebas(**payload.model_dump())
    db.add(b)
    db.commit()
    db.refresh(b)
    return {"payment": _dump(BebasOut, b)}


@router.get("/bebas/{bebas_id}")
def get_bebas(bebas_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    return {"payment": _dump(BebasOut, _bebas_or_404(db, bebas_id))}


@router.put("/bebas/{bebas_id}")
def update_bebas(
    bebas_id: int,
    payload: BebasUpdate,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    b = _bebas_or_404(db, bebas_id)
    changes = payload.model_dump(exclude_unset=True)
    _require_refs(db, changes.get("student_student_id"), changes.get("payment_payment_id"))

    for field, value in changes.items():
        setattr(b, field, value)
    b.bebas_last_update = datetime.utcnow()

    db.commit()
    db.refresh(b)
    return {"payment": _dump(BebasOut, b)}


@router.delete("/bebas/{bebas_id}")
def delete_bebas(bebas_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    b = _bebas_or_404(db, bebas_id)

    paid = db.query(BebasPay).filter(BebasPay.bebas_bebas_id == bebas_id).count()
    if paid > 0:
        raise HTTPException(status_code=400, detail="Cannot delete bebas payment with existing payment records")

    db.delete(b)
    db.commit()
    return {"success": True}

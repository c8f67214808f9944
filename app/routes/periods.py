# app/routes/periods.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.db.session import get_db
from app.models.admin import Period
from app.models.payment import Payment
from app.models.user import User
from app.schemas.academic import PeriodCreate, PeriodOut, PeriodUpdate
from app.services.pagination import paginate

router = APIRouter(prefix="/api/periods", tags=["periods"])


def _out(p: Period) -> dict:
    return PeriodOut.model_validate(p).model_dump()


def _get_or_404(db: Session, period_id: int) -> Period:
    p = db.get(Period, period_id)
    if not p:
        raise HTTPException(status_code=404, detail="Period not found")
    return p


def _deactivate_others(db: Session, keep_id: int | None = None) -> None:
    # at most one active period
    q = db.query(Period).filter(Period.period_status.is_(True))
    if keep_id is not None:
        q = q.filter(Period.period_id != keep_id)
    q.update({Period.period_status: False}, synchronize_session=False)


@router.get("")
def list_periods(
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    q = db.query(Period)
    if search:
        like = f"%{search}%"
        q = q.filter(
            or_(
                cast(Period.period_start, String).like(like),
                cast(Period.period_end, String).like(like),
            )
        )

    periods, pagination = paginate(q.order_by(Period.period_start.desc()), page, limit)
    return {"periods": [_out(p) for p in periods], "pagination": pagination}


@router.post("", status_code=201)
def create_period(payload: PeriodCreate, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    if payload.period_end < payload.period_start:
        raise HTTPException(status_code=400, detail="Period end must not be before period start")

    if payload.period_status:
        _deactivate_others(db)

    p = Period(
        period_start=payload.period_start,
        period_end=payload.period_end,
        period_status=payload.period_status,
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return {"period": _out(p)}


@router.get("/{period_id}")
def get_period(period_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    return {"period": _out(_get_or_404(db, period_id))}


@router.put("/{period_id}")
def update_period(
    period_id: int,
    payload: PeriodUpdate,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    p = _get_or_404(db, period_id)

    start = payload.period_start if payload.period_start is not None else p.period_start
    end = payload.period_end if payload.period_end is not None else p.period_end
    if end < start:
        raise HTTPException(status_code=400, detail="Period end must not be before period start")

    if payload.period_status:
        _deactivate_others(db, keep_id=period_id)

    p.period_start = start
    p.period_end = end
    if payload.period_status is not None:
        p.period_status = payload.period_status

    db.commit()
    db.refresh(p)
    return {"period": _out(p)}


@router.delete("/{period_id}")
def delete_period(period_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    p = _get_or_404(db, period_id)

    in_use = db.query(Payment).filter(Payment.period_period_id == period_id).count()
    if in_use > 0:
        raise HTTPException(status_code=400, detail="Cannot delete period with existing payments")

    db.delete(p)
    db.commit()
    return {"success": True}

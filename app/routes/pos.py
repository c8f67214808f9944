# app/routes/pos.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.db.session import get_db
from app.models.admin import Pos
from app.models.payment import Payment
from app.models.user import User
from app.schemas.finance import PosIn, PosOut
from app.services.pagination import paginate

router = APIRouter(prefix="/api/pos", tags=["pos"])


def _out(p: Pos) -> dict:
    return PosOut.model_validate(p).model_dump()


def _get_or_404(db: Session, pos_id: int) -> Pos:
    p = db.get(Pos, pos_id)
    if not p:
        raise HTTPException(status_code=404, detail="Pos not found")
    return p


@router.get("")
def list_pos(
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    q = db.query(Pos)
    if search:
        like = f"%{search}%"
        q = q.filter(or_(Pos.pos_name.like(like), Pos.pos_description.like(like)))

    items, pagination = paginate(q.order_by(Pos.pos_name.asc()), page, limit)
    return {"pos": [_out(p) for p in items], "pagination": pagination}


@router.post("", status_code=201)
def create_pos(payload: PosIn, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    name = (payload.pos_name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Pos name is required")

    p = Pos(pos_name=name, pos_description=payload.pos_description)
    db.add(p)
    db.commit()
    db.refresh(p)
    return {"pos": _out(p)}


@router.get("/{pos_id}")
def get_pos(pos_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    return {"pos": _out(_get_or_404(db, pos_id))}


@router.put("/{pos_id}")
def update_pos(
    pos_id: int,
    payload: PosIn,
    db: Session = Depends(get_db),
    _admin: User = Depends(get_current_user),
):
    p = _get_or_404(db, pos_id)

    if payload.pos_name is not None:
        name = payload.pos_name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Pos name is required")
        p.pos_name = name
    if payload.pos_description is not None:
        p.pos_description = payload.pos_description

    db.commit()
    db.refresh(p)
    return {"pos": _out(p)}


@router.delete("/{pos_id}")
def delete_pos(pos_id: int, db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    p = _get_or_404(db, pos_id)

    in_use = db.query(Payment).filter(Payment.pos_pos_id == pos_id).count()
    if in_use > 0:
        raise HTTPException(status_code=400, detail="Cannot delete pos with existing payments")

    db.delete(p)
    db.commit()
    return {"success": True}

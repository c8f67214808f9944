# app/routes/db.py
from fastapi import APIRouter, Request

from app.db.session import check_db_connection

router = APIRouter(prefix="/db", tags=["DB"])


@router.get("/ping")
def ping(request: Request):
    ok = check_db_connection(request.app.state.engine)
    return {"ok": ok}

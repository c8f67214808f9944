# app/routes/ppdb_auth.py
from fastapi import APIRouter, Depends, Response

from app.core.config import Settings
from app.core.deps import get_current_applicant, get_store, get_upgrade_scheduler, settings_from_app
from app.models.ppdb import PPDBParticipant
from app.routes.auth import login_as, principal_payload
from app.schemas.auth import PPDBLoginIn
from app.services.auth import UpgradeScheduler
from app.services.principals import PrincipalKind
from app.services.store import PrincipalStore

router = APIRouter(prefix="/api/ppdb/auth", tags=["ppdb auth"])


@router.post("/login")
def ppdb_login(
    payload: PPDBLoginIn,
    response: Response,
    store: PrincipalStore = Depends(get_store),
    settings: Settings = Depends(settings_from_app),
    schedule_upgrade: UpgradeScheduler = Depends(get_upgrade_scheduler),
):
    principal, token = login_as(
        PrincipalKind.PPDB,
        payload.nisn,
        payload.password,
        "NISN and password are required",
        response,
        store,
        settings,
        schedule_upgrade,
    )
    return {"success": True, "participant": principal_payload(principal), "token": token}


@router.get("/me")
def ppdb_me(participant: PPDBParticipant = Depends(get_current_applicant)):
    return {
        "participant": {
            "participantId": participant.id,
            "nisn": participant.nisn,
            "namaPeserta": participant.nama_peserta,
            "noPendaftaran": participant.no_pendaftaran,
            "status": participant.status,
            "ppdbStatus": participant.ppdb_status,
        }
    }

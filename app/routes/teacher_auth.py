# app/routes/teacher_auth.py
from fastapi import APIRouter, Depends, Response

from app.core.config import Settings
from app.core.deps import get_current_teacher, get_store, get_upgrade_scheduler, settings_from_app
from app.models.employee import Employee
from app.routes.auth import login_as, principal_payload
from app.schemas.auth import TeacherLoginIn
from app.services.auth import UpgradeScheduler
from app.services.principals import PrincipalKind
from app.services.store import PrincipalStore

router = APIRouter(prefix="/api/teacher/auth", tags=["teacher auth"])


@router.post("/login")
def teacher_login(
    payload: TeacherLoginIn,
    response: Response,
    store: PrincipalStore = Depends(get_store),
    settings: Settings = Depends(settings_from_app),
    schedule_upgrade: UpgradeScheduler = Depends(get_upgrade_scheduler),
):
    principal, token = login_as(
        PrincipalKind.TEACHER,
        payload.nip,
        payload.password,
        "NIP and password are required",
        response,
        store,
        settings,
        schedule_upgrade,
    )
    return {"success": True, "teacher": principal_payload(principal), "token": token}


@router.get("/me")
def teacher_me(teacher: Employee = Depends(get_current_teacher)):
    return {
        "teacher": {
            "employeeId": teacher.employee_id,
            "nip": teacher.nip,
            "employeeFullName": teacher.employee_full_name,
            "employeeStatus": teacher.employee_status,
        }
    }

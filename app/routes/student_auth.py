# app/routes/student_auth.py
from fastapi import APIRouter, Depends, Response

from app.core.config import Settings
from app.core.deps import get_current_student, get_store, get_upgrade_scheduler, settings_from_app
from app.models.student import Student
from app.routes.auth import login_as, principal_payload
from app.schemas.academic import ClassOut, MajorOut
from app.schemas.auth import StudentLoginIn
from app.services.auth import UpgradeScheduler
from app.services.principals import PrincipalKind
from app.services.store import PrincipalStore

router = APIRouter(prefix="/api/student/auth", tags=["student auth"])


@router.post("/login")
def student_login(
    payload: StudentLoginIn,
    response: Response,
    store: PrincipalStore = Depends(get_store),
    settings: Settings = Depends(settings_from_app),
    schedule_upgrade: UpgradeScheduler = Depends(get_upgrade_scheduler),
):
    principal, token = login_as(
        PrincipalKind.STUDENT,
        payload.nis,
        payload.password,
        "NIS and password are required",
        response,
        store,
        settings,
        schedule_upgrade,
    )
    return {"success": True, "student": principal_payload(principal), "token": token}


@router.get("/me")
def student_me(student: Student = Depends(get_current_student)):
    return {
        "student": {
            "studentId": student.student_id,
            "nis": student.student_nis,
            "nisn": student.student_nisn,
            "fullName": student.student_full_name,
            "gender": student.student_gender,
            "img": student.student_img,
            "class": ClassOut.model_validate(student.school_class).model_dump() if student.school_class else None,
            "major": MajorOut.model_validate(student.major).model_dump() if student.major else None,
        }
    }

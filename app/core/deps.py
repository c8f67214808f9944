# app/core/deps.py
from fastapi import BackgroundTasks, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import TokenInvalid
from app.db.session import get_db
from app.models.employee import Employee
from app.models.ppdb import PPDBParticipant
from app.models.student import Student
from app.models.user import User
from app.services.auth import UpgradeScheduler, upgrade_legacy_hash_in_new_session, verify_token
from app.services.principals import PrincipalKind
from app.services.store import PrincipalStore

security = HTTPBearer(auto_error=False)

# Cookie that carries the session of each kind of principal.
SESSION_COOKIES = {
    PrincipalKind.ADMIN: "auth_token",
    PrincipalKind.STUDENT: "student_token",
    PrincipalKind.TEACHER: "teacher_token",
    PrincipalKind.PPDB: "ppdb_token",
}


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_store(db: Session = Depends(get_db)) -> PrincipalStore:
    return PrincipalStore(db)


def get_upgrade_scheduler(request: Request, background_tasks: BackgroundTasks) -> UpgradeScheduler:
    """Legacy hash rewrites run after the response, in their own session."""
    session_factory = request.app.state.session_factory

    def schedule(kind: PrincipalKind, principal_id: int, raw_password: str) -> None:
        background_tasks.add_task(upgrade_legacy_hash_in_new_session, session_factory, kind, principal_id, raw_password)

    return schedule


def _token_from_request(request: Request, creds: HTTPAuthorizationCredentials | None, kind: PrincipalKind):
    # Authorization header wins over the cookie
    if creds and creds.credentials:
        return creds.credentials
    return request.cookies.get(SESSION_COOKIES[kind])


def _current_row(kind: PrincipalKind, model):
    def dependency(
        request: Request,
        creds: HTTPAuthorizationCredentials = Depends(security),
        db: Session = Depends(get_db),
        settings: Settings = Depends(settings_from_app),
    ):
        token = _token_from_request(request, creds, kind)
        if not token:
            raise HTTPException(status_code=401, detail="Unauthorized")

        claims = verify_token(token, kind, settings)
        if claims is None:
            raise TokenInvalid("Invalid token")

        # The token is only a snapshot; deleted or disabled accounts lose access now.
        if PrincipalStore(db).get_principal(kind, claims.id) is None:
            raise TokenInvalid("Account not found or inactive")

        return db.get(model, claims.id)

    return dependency


get_current_user = _current_row(PrincipalKind.ADMIN, User)
get_current_student = _current_row(PrincipalKind.STUDENT, Student)
get_current_teacher = _current_row(PrincipalKind.TEACHER, Employee)
get_current_applicant = _current_row(PrincipalKind.PPDB, PPDBParticipant)

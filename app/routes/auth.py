# app/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, Response

from app.core.config import Settings
from app.core.deps import SESSION_COOKIES, get_current_user, get_store, get_upgrade_scheduler, settings_from_app
from app.core.errors import ConfigurationMissing, InvalidCredentials
from app.models.user import User
from app.schemas.auth import AdminLoginIn, UnifiedLoginIn
from app.schemas.users import UserOut
from app.services.auth import UpgradeScheduler, authenticate, issue_token
from app.services.principals import Principal, PrincipalKind
from app.services.store import PrincipalStore

router = APIRouter(tags=["auth"])

# Where the pages send each kind after a unified login.
DASHBOARDS = {
    PrincipalKind.ADMIN: "/manage/dashboard",
    PrincipalKind.STUDENT: "/student/dashboard",
    PrincipalKind.TEACHER: "/teacher/dashboard",
    PrincipalKind.PPDB: "/ppdb/dashboard",
}


def set_session_cookie(response: Response, kind: PrincipalKind, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIES[kind],
        value=token,
        httponly=True,
        secure=not settings.is_local,
        samesite="lax",
        max_age=settings.token_ttl_days * 24 * 60 * 60,
        path="/",
    )


def principal_payload(p: Principal) -> dict:
    if p.kind == PrincipalKind.ADMIN:
        return {"userId": p.id, "username": p.login_key, "fullName": p.display_name, "roleId": p.role}
    if p.kind == PrincipalKind.STUDENT:
        return {"studentId": p.id, "nis": p.login_key, "fullName": p.display_name}
    if p.kind == PrincipalKind.TEACHER:
        return {"employeeId": p.id, "nip": p.login_key, "employeeFullName": p.display_name}
    return {"participantId": p.id, "nisn": p.login_key, "namaPeserta": p.display_name}


def require_signing_secret(settings: Settings) -> None:
    # Refuse before touching credentials: no secret, no sessions.
    if not settings.jwt_secret:
        raise ConfigurationMissing("JWT_SECRET is not set")


def login_as(
    kind: PrincipalKind,
    login_key: str | None,
    password: str | None,
    missing_detail: str,
    response: Response,
    store: PrincipalStore,
    settings: Settings,
    schedule_upgrade: UpgradeScheduler,
) -> tuple[Principal, str]:
    """Shared login flow for every kind: verify, issue token, set cookie."""
    require_signing_secret(settings)
    if not login_key or not password:
        raise HTTPException(status_code=400, detail=missing_detail)

    principal = authenticate(store, kind, login_key, password, schedule_upgrade)
    if principal is None:
        raise InvalidCredentials()

    token = issue_token(principal, settings)
    set_session_cookie(response, kind, token, settings)
    return principal, token


@router.post("/api/auth/login")
def admin_login(
    payload: AdminLoginIn,
    response: Response,
    store: PrincipalStore = Depends(get_store),
    settings: Settings = Depends(settings_from_app),
    schedule_upgrade: UpgradeScheduler = Depends(get_upgrade_scheduler),
):
    principal, token = login_as(
        PrincipalKind.ADMIN,
        payload.login_key,
        payload.password,
        "Email and password are required",
        response,
        store,
        settings,
        schedule_upgrade,
    )
    return {"success": True, "user": principal_payload(principal), "token": token}


@router.get("/api/auth/me")
def admin_me(user: User = Depends(get_current_user)):
    return {"user": UserOut.model_validate(user).model_dump(mode="json")}


@router.post("/api/auth/logout")
def logout(response: Response):
    for cookie in SESSION_COOKIES.values():
        response.delete_cookie(cookie, path="/")
    return {"success": True}


@router.post("/api/login")
def unified_login(
    payload: UnifiedLoginIn,
    response: Response,
    store: PrincipalStore = Depends(get_store),
    settings: Settings = Depends(settings_from_app),
    schedule_upgrade: UpgradeScheduler = Depends(get_upgrade_scheduler),
):
    """One form for staff, students and teachers: admin first, then NIS, then NIP."""
    require_signing_secret(settings)
    if not payload.username or not payload.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    for kind in (PrincipalKind.ADMIN, PrincipalKind.STUDENT, PrincipalKind.TEACHER):
        principal = authenticate(store, kind, payload.username, payload.password, schedule_upgrade)
        if principal is None:
            continue

        token = issue_token(principal, settings)
        set_session_cookie(response, kind, token, settings)
        return {
            "success": True,
            "role": kind.value,
            "redirect": DASHBOARDS[kind],
            "user": principal_payload(principal),
            "token": token,
        }

    raise InvalidCredentials()

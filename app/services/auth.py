# app/services/auth.py
"""
Credential verification for the four login kinds (admin, student, teacher, PPDB).

One code path serves all of them; only the store lookup differs per kind.
Old accounts may still carry unsalted SHA1 hashes from the previous PHP
system. Those are accepted once and rewritten to bcrypt after the login
succeeds; the rewrite is best effort and never changes the login result.
"""
import logging
from datetime import timedelta
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.core.security import create_token, decode_token, hash_password, is_legacy_hash, verify_password
from app.services.principals import Principal, PrincipalKind, TokenClaims
from app.services.store import PrincipalStore

logger = logging.getLogger(__name__)

# Receives (kind, principal_id, raw_password) for a legacy hash that matched.
UpgradeScheduler = Callable[[PrincipalKind, int, str], None]


def normalize_login_key(kind: PrincipalKind, login_key: str) -> str:
    """
    Admin usernames and emails are stored lowercased and trimmed, so the
    input gets the same treatment. NIS / NIP / NISN are only trimmed.
    """
    key = (login_key or "").strip()
    if kind == PrincipalKind.ADMIN:
        key = key.lower()
    return key


def authenticate(
    store: PrincipalStore,
    kind: PrincipalKind,
    login_key: str,
    raw_password: str,
    schedule_upgrade: Optional[UpgradeScheduler] = None,
) -> Optional[Principal]:
    """
    Returns the public Principal on success, None on any credential failure.
    StoreUnavailable propagates so the caller can answer 503 instead of 401.

    A matching legacy hash is handed to `schedule_upgrade` to be rewritten
    after the response; without a scheduler it is rewritten before returning.
    """
    key = normalize_login_key(kind, login_key)
    if not key or not raw_password:
        return None

    principal = store.find_principal(kind, key)
    if principal is None or not principal.password_hash:
        logger.info("Login failed | kind=%s", kind.value)
        return None

    if not verify_password(raw_password, principal.password_hash):
        logger.info("Login failed | kind=%s id=%s", kind.value, principal.id)
        return None

    if is_legacy_hash(principal.password_hash):
        if schedule_upgrade is not None:
            schedule_upgrade(principal.kind, principal.id, raw_password)
        else:
            upgrade_legacy_hash(store, principal.kind, principal.id, raw_password)

    logger.info("Login ok | kind=%s id=%s", kind.value, principal.id)
    return principal.public()


def upgrade_legacy_hash(store: PrincipalStore, kind: PrincipalKind, principal_id: int, raw_password: str) -> bool:
    # Best effort: a failed rewrite never fails the login that triggered it.
    try:
        store.update_password_hash(kind, principal_id, hash_password(raw_password))
    except Exception as e:
        logger.warning("Legacy password upgrade failed | kind=%s id=%s | %s", kind.value, principal_id, e)
        return False
    logger.info("Legacy password upgraded to bcrypt | kind=%s id=%s", kind.value, principal_id)
    return True


def upgrade_legacy_hash_in_new_session(
    session_factory: sessionmaker,
    kind: PrincipalKind,
    principal_id: int,
    raw_password: str,
) -> None:
    """Background-task entry point: the request session is gone by the time this runs."""
    db = session_factory()
    try:
        upgrade_legacy_hash(PrincipalStore(db), kind, principal_id, raw_password)
    finally:
        db.close()


# =========================
# Session tokens
# =========================
def issue_token(principal: Principal, settings: Settings, ttl: Optional[timedelta] = None) -> str:
    """Raises ConfigurationMissing when no signing secret is configured."""
    return create_token(
        {
            "sub": str(principal.id),
            "login_key": principal.login_key,
            "role": principal.role,
            "type": principal.kind.value,
        },
        settings,
        ttl=ttl,
    )


def verify_token(token: str, expected_kind: PrincipalKind, settings: Settings) -> Optional[TokenClaims]:
    """
    Signature and expiry first, then the `type` tag must match the expected
    kind: a student token is never accepted where an admin one is required.
    Never raises.
    """
    payload = decode_token(token, settings)
    if payload is None:
        return None

    if payload.get("type") != expected_kind.value:
        return None

    try:
        principal_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None

    role = payload.get("role")
    return TokenClaims(
        kind=expected_kind,
        id=principal_id,
        login_key=payload.get("login_key"),
        role=role if isinstance(role, int) else None,
    )

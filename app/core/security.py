# app/core/security.py
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.hash import hex_sha1

from app.core.config import Settings
from app.core.errors import ConfigurationMissing

logger = logging.getLogger(__name__)

# bcrypt cost matches the hashes already stored by the previous application
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

LEGACY_SHA1_RE = re.compile(r"^[a-f0-9]{40}$")


# =========================
# Passwords
# =========================
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def is_legacy_hash(password_hash: str) -> bool:
    return bool(LEGACY_SHA1_RE.fullmatch(password_hash or ""))


def verify_password(password: str, password_hash: str) -> bool:
    """
    Checks a raw password against a stored hash in either encoding:
    - 40 lowercase hex chars: unsalted SHA1 from the old PHP application
    - anything else: bcrypt
    A stored value that is not a parseable bcrypt hash, or a password passlib
    refuses (e.g. PasswordSizeError), simply does not match.
    """
    if not password_hash:
        return False

    try:
        if is_legacy_hash(password_hash):
            return hex_sha1.verify(password, password_hash)
        return pwd_context.verify(password, password_hash)
    except ValueError as exc:
        logger.warning("Password check refused: %s", type(exc).__name__)
        return False


# =========================
# Tokens
# =========================
def _require_secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise ConfigurationMissing("JWT_SECRET is not set")
    return settings.jwt_secret


def create_token(payload: dict[str, Any], settings: Settings, ttl: timedelta | None = None) -> str:
    secret = _require_secret(settings)
    if ttl is None:
        ttl = timedelta(days=settings.token_ttl_days)

    now = datetime.now(timezone.utc)
    to_encode = dict(payload)
    to_encode.update({"iat": now, "exp": now + ttl})
    return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict[str, Any] | None:
    """Returns the claims, or None for any bad, expired or unverifiable token."""
    if not token or not isinstance(token, str):
        return None
    try:
        secret = _require_secret(settings)
    except ConfigurationMissing:
        logger.error("Token rejected: JWT_SECRET is not set")
        return None

    try:
        return jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

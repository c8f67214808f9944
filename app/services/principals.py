# app/services/principals.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PrincipalKind(str, Enum):
    """The four kinds of account that can log in. The value is the token `type` tag."""

    ADMIN = "admin"
    STUDENT = "student"
    TEACHER = "teacher"
    PPDB = "ppdb"


@dataclass(frozen=True)
class Principal:
    kind: PrincipalKind
    id: int
    login_key: Optional[str]
    display_name: Optional[str]
    role: Optional[int] = None
    password_hash: Optional[str] = field(default=None, repr=False, compare=False)

    def public(self) -> "Principal":
        """Copy without the password hash, safe to hand back to callers."""
        return Principal(
            kind=self.kind,
            id=self.id,
            login_key=self.login_key,
            display_name=self.display_name,
            role=self.role,
        )


@dataclass(frozen=True)
class TokenClaims:
    kind: PrincipalKind
    id: int
    login_key: Optional[str]
    role: Optional[int]

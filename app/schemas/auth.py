# app/schemas/auth.py
from typing import Optional

from pydantic import BaseModel


# Fields are optional so a missing one answers 400 with a readable message
# instead of a 422 validation dump; the login forms rely on that.
class AdminLoginIn(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @property
    def login_key(self) -> Optional[str]:
        return self.username or self.email


class StudentLoginIn(BaseModel):
    nis: Optional[str] = None
    password: Optional[str] = None


class TeacherLoginIn(BaseModel):
    nip: Optional[str] = None
    password: Optional[str] = None


class PPDBLoginIn(BaseModel):
    nisn: Optional[str] = None
    password: Optional[str] = None


class UnifiedLoginIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

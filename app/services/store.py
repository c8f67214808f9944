# app/services/store.py
"""
Store adapter between the ORM and the auth / branding services.

Each principal kind lives in its own table with its own column names; this
module maps all of them onto one `Principal` shape so the services never see
raw rows. Any SQLAlchemy failure is re-raised as StoreUnavailable.
"""
import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreUnavailable
from app.models.employee import Employee
from app.models.ppdb import PPDBParticipant
from app.models.school import School
from app.models.student import Student
from app.models.user import User
from app.services.principals import Principal, PrincipalKind

logger = logging.getLogger(__name__)


def _user_to_principal(u: User) -> Principal:
    return Principal(
        kind=PrincipalKind.ADMIN,
        id=int(u.user_id),
        login_key=u.username or u.user_email,
        display_name=u.user_full_name,
        role=u.user_role_role_id,
        password_hash=u.user_password,
    )


def _student_to_principal(s: Student) -> Principal:
    return Principal(
        kind=PrincipalKind.STUDENT,
        id=int(s.student_id),
        login_key=s.student_nis,
        display_name=s.student_full_name,
        password_hash=s.student_password,
    )


def _employee_to_principal(e: Employee) -> Principal:
    return Principal(
        kind=PrincipalKind.TEACHER,
        id=int(e.employee_id),
        login_key=e.nip,
        display_name=e.employee_full_name,
        password_hash=e.password or e.employee_password,
    )


def _participant_to_principal(p: PPDBParticipant) -> Principal:
    return Principal(
        kind=PrincipalKind.PPDB,
        id=int(p.id),
        login_key=p.nisn,
        display_name=p.nama_peserta,
        password_hash=p.password,
    )


class PrincipalStore:
    def __init__(self, db: Session):
        self.db = db

    # -------------------------
    # Lookups
    # -------------------------
    def _query_by_login_key(self, kind: PrincipalKind, key: str):
        if kind == PrincipalKind.ADMIN:
            return (
                self.db.query(User)
                .filter(or_(User.username == key, User.user_email == key))
                .filter(User.user_is_deleted.is_(False))
                .order_by(User.user_id.asc())
                .first()
            )
        if kind == PrincipalKind.STUDENT:
            return (
                self.db.query(Student)
                .filter(Student.student_nis == key)
                .filter(Student.student_status.is_(True))
                .first()
            )
        if kind == PrincipalKind.TEACHER:
            return (
                self.db.query(Employee)
                .filter(Employee.nip == key)
                .filter(Employee.employee_status == 1)
                .first()
            )
        if kind == PrincipalKind.PPDB:
            return self.db.query(PPDBParticipant).filter(PPDBParticipant.nisn == key).first()
        raise ValueError(f"Unknown principal kind: {kind}")

    def _get_row(self, kind: PrincipalKind, principal_id: int):
        model = {
            PrincipalKind.ADMIN: User,
            PrincipalKind.STUDENT: Student,
            PrincipalKind.TEACHER: Employee,
            PrincipalKind.PPDB: PPDBParticipant,
        }[kind]
        return self.db.get(model, principal_id)

    def find_principal(self, kind: PrincipalKind, key: str) -> Optional[Principal]:
        try:
            row = self._query_by_login_key(kind, key)
        except SQLAlchemyError as e:
            logger.error("Principal lookup failed | kind=%s | %s", kind.value, e)
            raise StoreUnavailable(str(e)) from e
        return _to_principal(kind, row) if row is not None else None

    def get_principal(self, kind: PrincipalKind, principal_id: int) -> Optional[Principal]:
        """Live record by id, or None when missing, deleted or inactive."""
        try:
            row = self._get_row(kind, principal_id)
        except SQLAlchemyError as e:
            logger.error("Principal fetch failed | kind=%s id=%s | %s", kind.value, principal_id, e)
            raise StoreUnavailable(str(e)) from e

        if row is None or not _is_active(kind, row):
            return None
        return _to_principal(kind, row)

    # -------------------------
    # Writes
    # -------------------------
    def update_password_hash(self, kind: PrincipalKind, principal_id: int, new_hash: str) -> None:
        try:
            row = self._get_row(kind, principal_id)
            if row is None:
                raise StoreUnavailable(f"{kind.value} {principal_id} vanished before password update")

            if kind == PrincipalKind.ADMIN:
                row.user_password = new_hash
            elif kind == PrincipalKind.STUDENT:
                row.student_password = new_hash
            elif kind == PrincipalKind.TEACHER:
                # always write the canonical column; drop the legacy copy
                row.password = new_hash
                row.employee_password = None
            else:
                row.password = new_hash

            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable(str(e)) from e

    # -------------------------
    # Tenants
    # -------------------------
    def find_tenant_by_domain(self, domain: str) -> Optional[School]:
        try:
            return (
                self.db.query(School)
                .filter(School.domain == domain)
                .filter(School.deleted_at.is_(None))
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreUnavailable(str(e)) from e


def _is_active(kind: PrincipalKind, row) -> bool:
    if kind == PrincipalKind.ADMIN:
        return not row.user_is_deleted
    if kind == PrincipalKind.STUDENT:
        return bool(row.student_status)
    if kind == PrincipalKind.TEACHER:
        return row.employee_status == 1
    return True


def _to_principal(kind: PrincipalKind, row) -> Principal:
    if kind == PrincipalKind.ADMIN:
        return _user_to_principal(row)
    if kind == PrincipalKind.STUDENT:
        return _student_to_principal(row)
    if kind == PrincipalKind.TEACHER:
        return _employee_to_principal(row)
    return _participant_to_principal(row)

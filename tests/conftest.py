import hashlib

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.security import hash_password
from app.db.base import Base
from app.main import create_app
from app.models.employee import Employee
from app.models.ppdb import PPDBParticipant
from app.models.student import Major, SchoolClass, Student
from app.models.user import Role, User
from app.services.auth import issue_token
from app.services.principals import Principal, PrincipalKind

ADMIN_PASSWORD = "admin-pass-123"
STUDENT_PASSWORD = "siswa-pass-123"
TEACHER_PASSWORD = "guru-pass-123"
PPDB_PASSWORD = "ppdb-pass-123"


def sha1_hex(raw: str) -> str:
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


def make_engine():
    # one shared in-memory connection for the app and the test session
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        app_name="ePesantren",
        default_school_name="Sekolah",
        env="local",
        log_level="WARNING",
    )


@pytest.fixture()
def engine():
    eng = make_engine()
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture()
def client(app) -> TestClient:
    with TestClient(app) as tc:
        yield tc


@pytest.fixture()
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


# =========================
# Seed data
# =========================
@pytest.fixture()
def admin_user(db) -> User:
    role = Role(role_name="Administrator")
    db.add(role)
    db.flush()

    u = User(
        username="admin",
        user_email="admin@sekolah.sch.id",
        user_password=hash_password(ADMIN_PASSWORD),
        user_full_name="Admin Sekolah",
        user_role_role_id=role.role_id,
        user_is_deleted=False,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture()
def school_class(db) -> SchoolClass:
    c = SchoolClass(class_name="X IPA 1")
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


@pytest.fixture()
def major(db) -> Major:
    m = Major(majors_name="Ilmu Pengetahuan Alam", majors_short_name="IPA")
    db.add(m)
    db.commit()
    db.refresh(m)
    return m


@pytest.fixture()
def student(db, school_class, major) -> Student:
    s = Student(
        student_nis="12345",
        student_nisn="0012345678",
        student_password=hash_password(STUDENT_PASSWORD),
        student_full_name="Ahmad Fauzi",
        student_gender="L",
        student_status=True,
        class_class_id=school_class.class_id,
        majors_majors_id=major.majors_id,
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture()
def teacher(db) -> Employee:
    e = Employee(
        nip="198001012005011001",
        employee_full_name="Budi Santoso",
        password=hash_password(TEACHER_PASSWORD),
        employee_status=1,
    )
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


@pytest.fixture()
def applicant(db) -> PPDBParticipant:
    p = PPDBParticipant(
        nisn="0098765432",
        nama_peserta="Siti Aminah",
        password=hash_password(PPDB_PASSWORD),
        no_pendaftaran="PPDB-2024-001",
        status="registered",
        ppdb_status="pending",
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


@pytest.fixture()
def admin_token(admin_user, settings) -> str:
    principal = Principal(
        kind=PrincipalKind.ADMIN,
        id=admin_user.user_id,
        login_key=admin_user.username,
        display_name=admin_user.user_full_name,
        role=admin_user.user_role_role_id,
    )
    return issue_token(principal, settings)


@pytest.fixture()
def admin_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}

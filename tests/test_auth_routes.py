from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.errors import StoreUnavailable
from app.main import create_app
from app.models.employee import Employee
from app.services.store import PrincipalStore

from conftest import ADMIN_PASSWORD, PPDB_PASSWORD, STUDENT_PASSWORD, TEACHER_PASSWORD, make_engine, sha1_hex


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _deleted_cookies(response) -> list:
    return [h.split("=", 1)[0] for h in response.headers.get_list("set-cookie") if "Max-Age=0" in h]


# =========================
# Admin
# =========================
def test_admin_login_returns_token_and_sets_cookie(client, admin_user):
    r = client.post("/api/auth/login", json={"username": " Admin ", "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text

    body = r.json()
    assert body["success"] is True
    assert body["user"]["userId"] == admin_user.user_id
    assert body["token"]
    assert "password" not in str(body["user"]).lower()
    assert client.cookies.get("auth_token") == body["token"]


def test_admin_login_by_email(client, admin_user):
    r = client.post("/api/auth/login", json={"email": "ADMIN@sekolah.sch.id", "password": ADMIN_PASSWORD})
    assert r.status_code == 200


def test_admin_login_missing_fields_is_400(client, admin_user):
    r = client.post("/api/auth/login", json={"username": "admin"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Email and password are required"


def test_wrong_password_and_unknown_user_are_indistinguishable(client, admin_user):
    headers = {"x-request-id": "fixed-id"}
    wrong = client.post("/api/auth/login", json={"username": "admin", "password": "nope"}, headers=headers)
    unknown = client.post("/api/auth/login", json={"username": "ghost", "password": "nope"}, headers=headers)

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert wrong.json()["error"]["code"] == "invalid_credentials"


def test_oversized_password_on_legacy_account_looks_like_unknown_user(client, db, admin_user):
    admin_user.user_password = sha1_hex("lama123")
    db.commit()

    headers = {"x-request-id": "fixed-id"}
    body = {"password": "x" * 5000}
    legacy = client.post("/api/auth/login", json={**body, "username": "admin"}, headers=headers)
    unknown = client.post("/api/auth/login", json={**body, "username": "ghost"}, headers=headers)

    assert legacy.status_code == unknown.status_code == 401
    assert legacy.json() == unknown.json()


def test_me_with_header_and_with_cookie(client, admin_user):
    r = client.post("/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    token = r.json()["token"]

    # cookie set by the login
    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["username"] == "admin"
    assert "user_password" not in me.json()["user"]

    client.cookies.clear()
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers=_bearer(token)).status_code == 200


def test_me_rejects_garbage_token(client, admin_user):
    r = client.get("/api/auth/me", headers=_bearer("garbage"))
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "invalid_token"
    assert r.json()["error"]["message"] == "Invalid token"


def test_deleted_admin_token_stops_working(client, db, admin_user, admin_headers):
    assert client.get("/api/auth/me", headers=admin_headers).status_code == 200

    admin_user.user_is_deleted = True
    db.commit()

    r = client.get("/api/auth/me", headers=admin_headers)
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Account not found or inactive"


def test_logout_clears_every_session_cookie(client):
    r = client.post("/api/auth/logout")
    assert r.status_code == 200
    assert set(_deleted_cookies(r)) == {"auth_token", "student_token", "teacher_token", "ppdb_token"}


def test_store_failure_answers_503(client, admin_user, monkeypatch):
    def boom(self, kind, key):
        raise StoreUnavailable("connection refused")

    monkeypatch.setattr(PrincipalStore, "find_principal", boom)
    r = client.post("/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert r.status_code == 503
    assert r.json()["error"]["code"] == "store_unavailable"


def test_missing_secret_refuses_login_with_500():
    app = create_app(Settings(database_url="sqlite://", jwt_secret="", log_level="WARNING"), make_engine())
    with TestClient(app) as c:
        r = c.post("/api/auth/login", json={"username": "admin", "password": "x"})
        assert r.status_code == 500
        assert r.json()["error"]["code"] == "configuration_error"

        assert c.get("/api/auth/me", headers=_bearer("anything")).status_code == 401


# =========================
# Student / teacher / PPDB
# =========================
def test_student_login_and_me(client, student):
    r = client.post("/api/student/auth/login", json={"nis": "12345", "password": STUDENT_PASSWORD})
    assert r.status_code == 200, r.text
    assert r.json()["student"]["studentId"] == student.student_id
    assert client.cookies.get("student_token")

    me = client.get("/api/student/auth/me")
    assert me.status_code == 200
    body = me.json()["student"]
    assert body["nis"] == "12345"
    assert body["class"]["class_name"] == "X IPA 1"
    assert body["major"]["majors_short_name"] == "IPA"


def test_student_login_missing_nis_is_400(client, student):
    r = client.post("/api/student/auth/login", json={"password": STUDENT_PASSWORD})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "NIS and password are required"


def test_student_token_is_not_an_admin_token(client, admin_user, student):
    r = client.post("/api/student/auth/login", json={"nis": "12345", "password": STUDENT_PASSWORD})
    token = r.json()["token"]
    client.cookies.clear()

    denied = client.get("/api/auth/me", headers=_bearer(token))
    assert denied.status_code == 401
    assert denied.json()["error"]["message"] == "Invalid token"
    assert client.get("/api/users", headers=_bearer(token)).status_code == 401


def test_admin_token_is_not_a_student_token(client, admin_headers):
    assert client.get("/api/student/auth/me", headers=admin_headers).status_code == 401


def test_teacher_login_upgrades_legacy_column(client, db, teacher):
    teacher.password = None
    teacher.employee_password = sha1_hex("guru-lama")
    db.commit()

    r = client.post("/api/teacher/auth/login", json={"nip": teacher.nip, "password": "guru-lama"})
    assert r.status_code == 200, r.text
    assert r.json()["teacher"]["employeeId"] == teacher.employee_id

    db.expire_all()
    row = db.get(Employee, teacher.employee_id)
    assert row.password.startswith("$2")
    assert row.employee_password is None

    me = client.get("/api/teacher/auth/me")
    assert me.status_code == 200
    assert me.json()["teacher"]["nip"] == teacher.nip


def test_teacher_login_with_current_password(client, teacher):
    r = client.post("/api/teacher/auth/login", json={"nip": teacher.nip, "password": TEACHER_PASSWORD})
    assert r.status_code == 200


def test_ppdb_login_and_me(client, applicant):
    r = client.post("/api/ppdb/auth/login", json={"nisn": "0098765432", "password": PPDB_PASSWORD})
    assert r.status_code == 200, r.text
    assert r.json()["participant"]["participantId"] == applicant.id

    me = client.get("/api/ppdb/auth/me")
    assert me.status_code == 200
    assert me.json()["participant"]["noPendaftaran"] == "PPDB-2024-001"


# =========================
# Unified login
# =========================
def test_unified_login_routes_each_kind(client, admin_user, student, teacher):
    admin = client.post("/api/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert admin.status_code == 200
    assert admin.json()["role"] == "admin"
    assert admin.json()["redirect"] == "/manage/dashboard"

    siswa = client.post("/api/login", json={"username": "12345", "password": STUDENT_PASSWORD})
    assert siswa.json()["role"] == "student"
    assert siswa.json()["redirect"] == "/student/dashboard"
    assert client.cookies.get("student_token") == siswa.json()["token"]

    guru = client.post("/api/login", json={"username": teacher.nip, "password": TEACHER_PASSWORD})
    assert guru.json()["role"] == "teacher"


def test_unified_login_failure_is_401(client, admin_user, student):
    r = client.post("/api/login", json={"username": "12345", "password": "wrong"})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "invalid_credentials"


def test_unified_login_missing_fields_is_400(client):
    r = client.post("/api/login", json={})
    assert r.status_code == 400


# =========================
# Plumbing
# =========================
def test_request_id_is_echoed(client):
    r = client.get("/db/ping", headers={"x-request-id": "abc-123"})
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert r.headers["x-request-id"] == "abc-123"


def test_validation_errors_use_the_error_envelope(client, admin_headers):
    r = client.post("/api/payments", json={"payment_type": "WEEKLY"}, headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "validation_error"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.models.school import School
from app.services.branding import (
    default_branding,
    generate_hover_color,
    parent_domain,
    resolve_branding,
    strip_port,
    validate_hex_color,
    validate_logo_url,
)
from app.services.store import PrincipalStore

from conftest import make_engine


@pytest.fixture()
def tenant(db) -> School:
    s = School(
        domain="sekolah.sch.id",
        school_name="SMA Nurul Huda",
        logo_url="https://cdn.sekolah.sch.id/logo.png",
        primary_color="#1A2B3C",
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("#ABC", "#aabbcc"),
        ("abc", "#aabbcc"),
        ("#1a2b3c", "#1a2b3c"),
        ("1A2B3C", "#1a2b3c"),
        ("#12345", None),
        ("#aabbccdd", None),
        ("red", None),
        ("javascript:alert(1)", None),
        ("", None),
        (None, None),
        (123, None),
    ],
)
def test_validate_hex_color(raw, expected):
    assert validate_hex_color(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://cdn.example.com/logo.png", "https://cdn.example.com/logo.png"),
        ("  /uploads/logo.png  ", "/uploads/logo.png"),
        ("./logo.png", "./logo.png"),
        ("http://cdn.example.com/logo.png", None),
        ("javascript:alert(1)", None),
        ("JavaScript:alert(1)", None),
        ("data:image/png;base64,AAAA", None),
        ("data:text/html,<script>", None),
        ("//evil.com/logo.png", None),
        ("/\\evil.com/logo.png", None),
        ("/uploads/../secret.png", None),
        ("logo.png", None),
        ("https://", None),
        ("", None),
        (None, None),
    ],
)
def test_validate_logo_url(raw, expected):
    assert validate_logo_url(raw) == expected


def test_hover_color():
    assert generate_hover_color("#ff0000") == "rgba(255, 0, 0, 0.87)"
    assert generate_hover_color("0f0") == "rgba(0, 255, 0, 0.87)"
    assert generate_hover_color("nope") is None
    assert generate_hover_color(None) is None


def test_strip_port():
    assert strip_port("sekolah.sch.id:8080") == "sekolah.sch.id"
    assert strip_port("sekolah.sch.id") == "sekolah.sch.id"


@pytest.mark.parametrize(
    "host, expected",
    [
        ("ppdb.sekolah.sch.id", "sekolah.sch.id"),
        ("a.b.example.com", "example.com"),
        ("portal.kampus.ac.id", "kampus.ac.id"),
        ("www.school.co.uk", "school.co.uk"),
        ("example.com", None),
        ("localhost", None),
    ],
)
def test_parent_domain(host, expected):
    assert parent_domain(host) == expected


def test_exact_domain_match(db, tenant, settings):
    b = resolve_branding(PrincipalStore(db), "sekolah.sch.id", settings)
    assert b.school_name == "SMA Nurul Huda"
    assert b.primary_color == "#1a2b3c"
    assert b.logo_url == "https://cdn.sekolah.sch.id/logo.png"
    assert b.app_name == settings.app_name


def test_subdomain_with_port_falls_back_to_parent(db, tenant, settings):
    b = resolve_branding(PrincipalStore(db), "ppdb.sekolah.sch.id:3000", settings)
    assert b.school_name == "SMA Nurul Huda"


def test_deep_subdomain_resolves_to_registered_parent(db, settings):
    db.add(School(domain="example.com", school_name="Pesantren Al Ikhlas"))
    db.commit()

    b = resolve_branding(PrincipalStore(db), "sub.school.example.com", settings)
    assert b.school_name == "Pesantren Al Ikhlas"


def test_unsafe_tenant_fields_are_dropped(db, tenant, settings):
    tenant.logo_url = "javascript:alert(document.cookie)"
    tenant.primary_color = "red; background:url(x)"
    db.commit()

    b = resolve_branding(PrincipalStore(db), "sekolah.sch.id", settings)
    assert b.school_name == "SMA Nurul Huda"
    assert b.logo_url is None
    assert b.primary_color is None


def test_deleted_tenant_gives_default(db, tenant, settings):
    tenant.deleted_at = datetime(2024, 1, 1)
    db.commit()
    assert resolve_branding(PrincipalStore(db), "sekolah.sch.id", settings) == default_branding(settings)


@pytest.mark.parametrize("host", ["unknown.example.com", "", "bad\x00host.com", None])
def test_unknown_or_malformed_host_gives_default(db, tenant, settings, host):
    assert resolve_branding(PrincipalStore(db), host, settings) == default_branding(settings)


def test_store_errors_give_default(settings):
    class BrokenStore:
        def find_tenant_by_domain(self, domain):
            raise RuntimeError("connection reset")

    assert resolve_branding(BrokenStore(), "sekolah.sch.id", settings) == default_branding(settings)


def test_branding_endpoint(client, tenant):
    r = client.get("/api/public/branding", headers={"host": "ppdb.sekolah.sch.id"})
    assert r.status_code == 200
    assert r.json() == {
        "appName": "ePesantren",
        "schoolName": "SMA Nurul Huda",
        "logoUrl": "https://cdn.sekolah.sch.id/logo.png",
        "primaryColor": "#1a2b3c",
        "hoverColor": "rgba(26, 43, 60, 0.87)",
    }
    assert r.headers["cache-control"] == "public, s-maxage=60, stale-while-revalidate=300"


def test_branding_endpoint_default(client):
    r = client.get("/api/public/branding")
    assert r.status_code == 200
    assert r.json() == {
        "appName": "ePesantren",
        "schoolName": "Sekolah",
        "logoUrl": None,
        "primaryColor": None,
        "hoverColor": None,
    }


def test_branding_endpoint_uses_the_app_settings_not_the_environment(monkeypatch):
    monkeypatch.setenv("APP_NAME", "Dari Lingkungan")
    app = create_app(
        Settings(database_url="sqlite://", jwt_secret="x" * 32, app_name="Portal Uji", log_level="WARNING"),
        make_engine(),
    )
    with TestClient(app) as c:
        assert c.get("/api/public/branding").json()["appName"] == "Portal Uji"

from datetime import timedelta

import pytest

from app.core.config import Settings, normalize_db_url
from app.core.errors import ConfigurationMissing
from app.core.security import create_token, decode_token, hash_password, is_legacy_hash, verify_password

from conftest import sha1_hex


def test_bcrypt_hash_verifies_and_is_not_legacy():
    h = hash_password("rahasia")
    assert h.startswith("$2")
    assert not is_legacy_hash(h)
    assert verify_password("rahasia", h)
    assert not verify_password("salah", h)


def test_legacy_sha1_hash_verifies():
    h = sha1_hex("rahasia")
    assert is_legacy_hash(h)
    assert verify_password("rahasia", h)
    assert not verify_password("salah", h)


def test_uppercase_hex_is_not_treated_as_legacy():
    assert not is_legacy_hash(sha1_hex("rahasia").upper())


def test_oversized_password_never_matches_either_scheme():
    huge = "x" * 5000
    assert not verify_password(huge, sha1_hex("rahasia"))
    assert not verify_password(huge, hash_password("rahasia"))


def test_garbage_or_empty_hash_never_matches():
    assert not verify_password("rahasia", "not-a-hash")
    assert not verify_password("rahasia", "")
    assert not verify_password("rahasia", None)


def test_token_roundtrip(settings):
    token = create_token({"sub": "7", "type": "admin"}, settings)
    claims = decode_token(token, settings)
    assert claims["sub"] == "7"
    assert claims["type"] == "admin"
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_expired_token_is_rejected(settings):
    token = create_token({"sub": "7"}, settings, ttl=timedelta(seconds=-5))
    assert decode_token(token, settings) is None


def test_token_signed_with_other_secret_is_rejected(settings):
    other = Settings(database_url="sqlite://", jwt_secret="another-secret")
    token = create_token({"sub": "7"}, other)
    assert decode_token(token, settings) is None


def test_tampered_or_empty_token_is_rejected(settings):
    token = create_token({"sub": "7"}, settings)
    assert decode_token(token[:-2] + "xx", settings) is None
    assert decode_token("", settings) is None
    assert decode_token("not.a.jwt", settings) is None


def test_missing_secret_refuses_to_sign_and_to_verify(settings):
    token = create_token({"sub": "7"}, settings)
    unset = Settings(database_url="sqlite://", jwt_secret="")

    with pytest.raises(ConfigurationMissing):
        create_token({"sub": "7"}, unset)
    assert decode_token(token, unset) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("postgres://u:p@h/db", "postgresql+psycopg2://u:p@h/db"),
        ("postgresql://u:p@h/db", "postgresql+psycopg2://u:p@h/db"),
        ("postgresql+psycopg2://u:p@h/db", "postgresql+psycopg2://u:p@h/db"),
        ("sqlite://", "sqlite://"),
    ],
)
def test_normalize_db_url(raw, expected):
    assert normalize_db_url(raw) == expected

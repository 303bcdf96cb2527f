from datetime import datetime, timedelta, timezone

import pytest
from jose import ExpiredSignatureError, JWTError, jwt

from notes_app.utils.jwt_auth import create_access_token, decode_token


def test_token_roundtrip_carries_username_and_id(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    monkeypatch.delenv("JWT_EXP_MINUTES", raising=False)

    claims = decode_token(create_access_token(username="mluukkai", user_id="abc"))
    assert claims["username"] == "mluukkai"
    assert claims["id"] == "abc"
    assert "exp" not in claims


def test_expiry_is_opt_in(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    monkeypatch.setenv("JWT_EXP_MINUTES", "15")

    claims = decode_token(create_access_token(username="mluukkai", user_id="abc"))
    assert claims["exp"] > datetime.now(timezone.utc).timestamp()


def test_token_signed_with_other_secret_is_rejected(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    token = jwt.encode({"username": "x", "id": "y"}, "another-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_token(token)


def test_expired_token_raises_expired(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    token = jwt.encode({"username": "x", "id": "y", "exp": int(past.timestamp())}, "dev-secret-for-tests")
    with pytest.raises(ExpiredSignatureError):
        decode_token(token)


def test_signing_without_secret_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(RuntimeError):
        create_access_token(username="x", user_id="y")

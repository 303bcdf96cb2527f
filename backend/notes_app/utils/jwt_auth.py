from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt

from notes_app import config

bearer = HTTPBearer(auto_error=False)


def create_access_token(username: str, user_id: str) -> str:
    payload: dict[str, Any] = {"username": username, "id": user_id}
    minutes = config.jwt_exp_minutes()
    if minutes is not None:
        exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
        payload["exp"] = int(exp.timestamp())
    return jwt.encode(payload, config.jwt_secret(), algorithm=config.jwt_algorithm())


def decode_token(token: str) -> dict:
    # JWTError / ExpiredSignatureError are left to the error handlers
    return jwt.decode(token, config.jwt_secret(), algorithms=[config.jwt_algorithm()])


def token_claims(creds: Optional[HTTPAuthorizationCredentials]) -> Optional[dict]:
    """Claims of the bearer token, or None when the request carries none."""
    if creds is None or creds.scheme.lower() != "bearer":
        return None
    return decode_token(creds.credentials)

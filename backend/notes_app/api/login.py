from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from notes_app.models.auth import LoginRequest, TokenResponse
from notes_app.storage.database import Database, get_db
from notes_app.utils.auth_hash import verify_password
from notes_app.utils.jwt_auth import create_access_token

router = APIRouter(prefix="/api/login", tags=["login"])


@router.post("", response_model=TokenResponse)
def login(req: LoginRequest, db: Database = Depends(get_db)):
    user = db.users.find_by_username(req.username)
    # unknown user and wrong password look the same to the caller
    if user is None or not verify_password(req.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid username or password")

    token = create_access_token(username=user.username, user_id=user.id)
    return TokenResponse(token=token, username=user.username, name=user.name)

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from notes_app.models.users import UserCreate, UserOut
from notes_app.storage.database import Database, get_db
from notes_app.utils.auth_hash import hash_password

router = APIRouter(prefix="/api/users", tags=["users"])

MIN_PASSWORD_LENGTH = 3


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(req: UserCreate, db: Database = Depends(get_db)):
    if not req.password or len(req.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )

    # a taken username raises DuplicateKeyError, mapped to 400 by the error handlers
    user = db.users.create(req.username, req.name, hash_password(req.password))
    return user.to_dict()


@router.get("", response_model=list[UserOut])
def list_users(db: Database = Depends(get_db)):
    out = []
    for user in db.users.list_users():
        notes = [db.notes.get(note_id) for note_id in user.notes]
        out.append(user.to_dict(notes=[n.summary() for n in notes if n is not None]))
    return out

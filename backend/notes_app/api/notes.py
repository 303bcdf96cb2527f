from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import HTTPAuthorizationCredentials

from notes_app.models.notes import NoteCreate, NoteOut, NoteUpdate
from notes_app.storage.database import Database, get_db
from notes_app.storage.notes_store import Note
from notes_app.utils.jwt_auth import bearer, token_claims

router = APIRouter(prefix="/api/notes", tags=["notes"])


def _with_owner(db: Database, note: Note) -> dict:
    owner = db.users.get(note.user) if note.user else None
    return note.to_dict(user=owner.summary() if owner else None)


@router.get("", response_model=list[NoteOut])
def list_notes(db: Database = Depends(get_db)):
    return [_with_owner(db, n) for n in db.notes.list_notes()]


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: str, db: Database = Depends(get_db)):
    note = db.notes.get(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="note not found")
    return _with_owner(db, note)


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteCreate,
    db: Database = Depends(get_db),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
):
    user_id = payload.userId
    if not user_id:
        # the token only names the owner when the body does not
        user_id = (token_claims(creds) or {}).get("id")
    user = db.users.get(user_id) if user_id else None
    if user is None:
        raise HTTPException(status_code=400, detail="UserId missing or not valid")

    note = db.notes.create(content=payload.content, important=bool(payload.important), user_id=user.id)
    # not atomic with the save above: a failure here leaves the note without a back-reference
    db.users.add_note(user.id, note.id)
    return note.to_dict()


@router.put("/{note_id}", response_model=NoteOut)
def update_note(note_id: str, payload: NoteUpdate, db: Database = Depends(get_db)):
    updated = db.notes.update(note_id, content=payload.content, important=bool(payload.important))
    if updated is None:
        raise HTTPException(status_code=404, detail="note not found")
    return updated.to_dict()


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(note_id: str, db: Database = Depends(get_db)) -> Response:
    # idempotent: a well-formed id that matches nothing is still a success
    db.notes.delete(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

import hashlib
import json
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from notes_app.storage.errors import DocumentValidationError, DuplicateKeyError
from notes_app.storage.notes_store import _atomic_write_json
from notes_app.storage.object_id import new_id, parse_id


def _index_name(username: str) -> str:
    # usernames are free text; hash them so they are always a safe file name
    return hashlib.sha256(username.encode("utf-8")).hexdigest() + ".json"


@dataclass(frozen=True)
class UserRecord:
    id: str
    username: str
    name: Optional[str]
    password_hash: str
    created_at: str
    notes: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self, notes: Optional[list[dict[str, Any]]] = None) -> dict[str, Any]:
        """Public representation. The password hash is never included."""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "notes": notes if notes is not None else list(self.notes),
        }

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "name": self.name}


class UsersStore:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        # guards the read-modify-write of user documents
        self._write_lock = threading.Lock()

    @property
    def users_dir(self) -> Path:
        return self.base_dir / "users"

    @property
    def index_dir(self) -> Path:
        return self.base_dir / "usernames"

    def _user_path(self, user_id: str) -> Path:
        return self.users_dir / f"{user_id}.json"

    def _read(self, path: Path) -> UserRecord:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return UserRecord(
            id=raw["id"],
            username=raw["username"],
            name=raw.get("name"),
            password_hash=raw["password_hash"],
            created_at=raw["created_at"],
            notes=tuple(raw.get("notes", [])),
        )

    def _write(self, rec: UserRecord) -> None:
        _atomic_write_json(
            self._user_path(rec.id),
            {
                "id": rec.id,
                "username": rec.username,
                "name": rec.name,
                "password_hash": rec.password_hash,
                "created_at": rec.created_at,
                "notes": list(rec.notes),
            },
        )

    def create(self, username: str, name: Optional[str], password_hash: str) -> UserRecord:
        if not username:
            raise DocumentValidationError("User validation failed: username: Path `username` is required.")

        rec = UserRecord(
            id=new_id(),
            username=username,
            name=name,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        # unique index: the index entry is created exclusively, so only one
        # insert per username can ever succeed
        self.index_dir.mkdir(parents=True, exist_ok=True)
        try:
            with (self.index_dir / _index_name(username)).open("x", encoding="utf-8") as f:
                json.dump({"username": username, "id": rec.id}, f)
        except FileExistsError:
            raise DuplicateKeyError("username", username) from None

        try:
            self._write(rec)
        except Exception:
            # release the username so a failed insert does not reserve it
            (self.index_dir / _index_name(username)).unlink(missing_ok=True)
            raise
        return rec

    def get(self, user_id: str) -> Optional[UserRecord]:
        p = self._user_path(parse_id(user_id))
        if not p.exists():
            return None
        return self._read(p)

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        p = self.index_dir / _index_name(username)
        if not p.exists():
            return None
        text = p.read_text(encoding="utf-8")
        if not text:
            # index entry claimed by an insert that has not finished yet
            return None
        return self.get(json.loads(text)["id"])

    def list_users(self) -> list[UserRecord]:
        if not self.users_dir.exists():
            return []
        users = [self._read(p) for p in self.users_dir.glob("*.json")]
        return sorted(users, key=lambda u: u.created_at)

    def add_note(self, user_id: str, note_id: str) -> Optional[UserRecord]:
        note_ref = parse_id(note_id)
        with self._write_lock:
            rec = self.get(user_id)
            if rec is None:
                return None
            updated = UserRecord(
                id=rec.id,
                username=rec.username,
                name=rec.name,
                password_hash=rec.password_hash,
                created_at=rec.created_at,
                notes=rec.notes + (note_ref,),
            )
            self._write(updated)
        return updated

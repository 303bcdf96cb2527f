import json
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from notes_app.storage.errors import DocumentValidationError
from notes_app.storage.object_id import new_id, parse_id


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # one temp file per write, so concurrent writers of a document never share it
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, prefix=path.name + ".", suffix=".tmp", delete=False
    ) as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    try:
        os.replace(f.name, path)
    except OSError:
        os.unlink(f.name)
        raise


def _validate(content: Any) -> None:
    if not isinstance(content, str) or not content:
        raise DocumentValidationError("Note validation failed: content: Path `content` is required.")


@dataclass(frozen=True)
class Note:
    id: str
    content: str
    important: bool
    user: Optional[str]
    created_at: str

    def to_dict(self, user: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Public representation; pass ``user`` to embed the owner instead of its id."""
        return {
            "id": self.id,
            "content": self.content,
            "important": self.important,
            "user": user if user is not None else self.user,
        }

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "content": self.content, "important": self.important}

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "Note":
        return cls(
            id=raw["id"],
            content=raw["content"],
            important=bool(raw.get("important", False)),
            user=raw.get("user"),
            created_at=raw["created_at"],
        )


class NotesStore:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    @property
    def notes_dir(self) -> Path:
        return self.base_dir / "notes"

    def _note_path(self, note_id: str) -> Path:
        return self.notes_dir / f"{note_id}.json"

    def _read(self, path: Path) -> Note:
        return Note.from_raw(json.loads(path.read_text(encoding="utf-8")))

    def create(self, content: str, important: bool = False, user_id: Optional[str] = None) -> Note:
        _validate(content)
        note = Note(
            id=new_id(),
            content=content,
            important=bool(important),
            user=parse_id(user_id) if user_id is not None else None,
            created_at=_utc_now_iso(),
        )
        _atomic_write_json(self._note_path(note.id), {**note.to_dict(), "created_at": note.created_at})
        return note

    def list_notes(self) -> list[Note]:
        if not self.notes_dir.exists():
            return []
        notes = [self._read(p) for p in self.notes_dir.glob("*.json")]
        return sorted(notes, key=lambda n: n.created_at)

    def get(self, note_id: str) -> Optional[Note]:
        path = self._note_path(parse_id(note_id))
        if not path.exists():
            return None
        return self._read(path)

    def update(self, note_id: str, content: str, important: bool) -> Optional[Note]:
        path = self._note_path(parse_id(note_id))
        if not path.exists():
            return None
        _validate(content)

        raw = json.loads(path.read_text(encoding="utf-8"))
        raw["content"] = content
        raw["important"] = bool(important)
        _atomic_write_json(path, raw)
        return Note.from_raw(raw)

    def delete(self, note_id: str) -> bool:
        """Remove a note; returns False when there was nothing to remove."""
        path = self._note_path(parse_id(note_id))
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

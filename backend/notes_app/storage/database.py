from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Request

from notes_app.storage.notes_store import NotesStore
from notes_app.storage.users_store import UsersStore

logger = logging.getLogger(__name__)


class Database:
    """Handle on the document store, opened once when the app is created."""

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self.notes = NotesStore(data_dir)
        self.users = UsersStore(data_dir)

    @classmethod
    def connect(cls, data_dir: Path) -> "Database":
        logger.info("connecting to %s", data_dir)
        return cls(Path(data_dir))


def get_db(request: Request) -> Database:
    return request.app.state.db

from __future__ import annotations

import uuid

from notes_app.storage.errors import CastError


def new_id() -> str:
    return str(uuid.uuid4())


def parse_id(value) -> str:
    """Return the canonical form of a document id.

    Raises CastError when ``value`` is not a valid id, so callers can tell a
    malformed id apart from a well-formed one that matches nothing.
    """
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError):
        raise CastError(value) from None

import threading

import pytest

from notes_app.storage.errors import CastError, DocumentValidationError, DuplicateKeyError
from notes_app.storage.object_id import new_id, parse_id


def test_parse_id_normalizes_and_rejects_garbage():
    nid = new_id()
    assert parse_id(nid.upper()) == nid
    for bad in ["notavalidid", "5a3d5da59070081a82a3445", "", None]:
        with pytest.raises(CastError):
            parse_id(bad)


def test_username_is_unique_at_storage_level(db):
    db.users.create("root", "Superuser", "hash")
    with pytest.raises(DuplicateKeyError) as exc_info:
        db.users.create("root", "Someone else", "hash2")
    assert exc_info.value.key == "username"
    assert [u.username for u in db.users.list_users()] == ["root"]


def test_usernames_with_path_characters_are_stored_safely(db):
    rec = db.users.create("../etc/passwd", None, "hash")
    assert db.users.find_by_username("../etc/passwd") == rec
    assert db.users.find_by_username("missing") is None


def test_note_requires_content(db):
    with pytest.raises(DocumentValidationError):
        db.notes.create(content="")
    assert db.notes.list_notes() == []


def test_add_note_appends_reference(db):
    user = db.users.create("root", None, "hash")
    note = db.notes.create(content="HTML is easy", user_id=user.id)
    db.users.add_note(user.id, note.id)
    assert db.users.get(user.id).notes == (note.id,)
    assert db.notes.get(note.id).user == user.id


def test_add_note_to_missing_user_is_none(db):
    assert db.users.add_note(new_id(), new_id()) is None


def test_delete_is_idempotent(db):
    note = db.notes.create(content="temp")
    assert db.notes.delete(note.id) is True
    assert db.notes.delete(note.id) is False
    assert db.notes.get(note.id) is None


def test_update_missing_note_is_none(db):
    assert db.notes.update(new_id(), content="x", important=True) is None


def test_password_hash_not_in_public_dict(db):
    rec = db.users.create("root", "Superuser", "secret-hash")
    assert "secret-hash" not in rec.to_dict().values()


def test_concurrent_add_note_keeps_every_reference(db):
    user = db.users.create("root", None, "hash")
    errors = []

    def worker():
        try:
            for _ in range(20):
                note = db.notes.create(content="parallel", user_id=user.id)
                db.users.add_note(user.id, note.id)
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(db.notes.list_notes()) == 160
    assert len(db.users.get(user.id).notes) == 160
    assert list(db.data_dir.rglob("*.tmp")) == []


def test_failed_user_write_releases_username(db, monkeypatch):
    def broken_write(rec):
        raise OSError("disk full")

    monkeypatch.setattr(db.users, "_write", broken_write)
    with pytest.raises(OSError):
        db.users.create("root", None, "hash")
    monkeypatch.delattr(db.users, "_write")

    assert db.users.find_by_username("root") is None
    rec = db.users.create("root", None, "hash")
    assert db.users.find_by_username("root") == rec

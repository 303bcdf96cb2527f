import os

# must be set before notes_app.utils.auth_hash is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "dev-secret-for-tests")

import pytest
from fastapi.testclient import TestClient

from notes_app.main import create_app
from notes_app.utils.auth_hash import hash_password

INITIAL_NOTES = [
    {"content": "HTML is easy", "important": False},
    {"content": "Browser can execute only JavaScript", "important": True},
]


@pytest.fixture()
def app(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    monkeypatch.delenv("JWT_EXP_MINUTES", raising=False)
    return create_app(data_dir=tmp_path)


@pytest.fixture()
def db(app):
    return app.state.db


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def root_user(db):
    return db.users.create("root", "Superuser", hash_password("sekret"))


@pytest.fixture()
def test_user(db):
    return db.users.create("testuser", "Test User", hash_password("secretpassword"))


@pytest.fixture()
def initial_notes(db, test_user):
    out = []
    for n in INITIAL_NOTES:
        note = db.notes.create(content=n["content"], important=n["important"], user_id=test_user.id)
        db.users.add_note(test_user.id, note.id)
        out.append(note)
    return out


@pytest.fixture()
def notes_in_db(db):
    return lambda: [n.to_dict() for n in db.notes.list_notes()]


@pytest.fixture()
def users_in_db(db):
    return lambda: [u.to_dict() for u in db.users.list_users()]


@pytest.fixture()
def non_existing_id(db):
    # a well-formed id that was used once and then removed
    note = db.notes.create(content="willremovethissoon")
    db.notes.delete(note.id)
    return note.id

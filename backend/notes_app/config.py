"""Runtime configuration read from the process environment.

A ``.env`` file next to the working directory is loaded first (values
already in the environment win). Values are looked up on every call so that
tests can change them with ``monkeypatch.setenv``.
"""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def data_dir() -> Path:
    return Path(os.getenv("NOTES_DATA_DIR", str(DEFAULT_DATA_DIR)))


def port() -> int:
    return int(os.getenv("PORT", "3001"))


def jwt_secret() -> str:
    s = os.getenv("JWT_SECRET", "")
    if not s:
        raise RuntimeError("JWT_SECRET is not set")
    return s


def jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def jwt_exp_minutes() -> int | None:
    raw = os.getenv("JWT_EXP_MINUTES")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def bcrypt_rounds() -> int:
    try:
        return int(os.getenv("BCRYPT_ROUNDS", "10"))
    except ValueError:
        return 10


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    return [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

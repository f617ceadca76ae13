from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_project_root = Path(__file__).resolve().parents[1]

# Existing environment wins over the file.
load_dotenv(dotenv_path=_project_root / ".env", override=False)


def get_redis_url() -> str:
    return os.environ.get("REDIS_URL", "redis://localhost:6379/0")


def get_session_id() -> str:
    return os.environ.get("DICER_SESSION_ID", "default")


def get_lock_ttl_ms() -> int:
    raw = os.environ.get("DICER_LOCK_TTL_MS", "5000")
    try:
        ttl = int(raw)
    except ValueError as e:
        raise ValueError(f"DICER_LOCK_TTL_MS must be an integer, got {raw!r}") from e
    if ttl <= 0:
        raise ValueError("DICER_LOCK_TTL_MS must be > 0")
    return ttl


def get_cors_origins() -> list[str]:
    raw = os.environ.get("DICER_CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


def get_log_level() -> str:
    return os.environ.get("DICER_LOG_LEVEL", "INFO").upper()

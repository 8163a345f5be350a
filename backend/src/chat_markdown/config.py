"""Load settings from environment (.env and env vars)."""

from __future__ import annotations

import os
from pathlib import Path

# Load .env from backend root if present
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(_env_path)


def _str(key: str, default: str = "") -> str:
    return (os.environ.get(key) or "").strip() or default


def _int(key: str, default: int) -> int:
    raw = _str(key)
    try:
        return int(raw) if raw else default
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _bool(key: str, default: bool) -> bool:
    raw = _str(key).lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _list(key: str, default: str = "") -> list[str]:
    return [item.strip() for item in _str(key, default).split(",") if item.strip()]


# Logging
LOG_LEVEL = _str("CHAT_MARKDOWN_LOG_LEVEL", "INFO").upper()

# Parsing
MAX_TEXT_CHARS = _int("CHAT_MARKDOWN_MAX_TEXT_CHARS", 200_000)

# Links
CONFIRM_UNTRUSTED_LINKS = _bool("CHAT_MARKDOWN_CONFIRM_UNTRUSTED_LINKS", True)
EXTRA_TRUSTED_DOMAINS = _list("CHAT_MARKDOWN_EXTRA_TRUSTED_DOMAINS")

# HTTP
CORS_ORIGINS = _list("CHAT_MARKDOWN_CORS_ORIGINS", "*")

from __future__ import annotations

import os

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ALLOWED_ORIGINS = "http://localhost:3000"


def log_level() -> str:
    return os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def cors_allowed_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ALLOWED_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

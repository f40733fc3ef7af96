from __future__ import annotations

import os
from typing import Iterable

from dotenv import load_dotenv

# Values from a local .env never override variables already set in the environment.
load_dotenv()


def get_redis_url() -> str:
    return os.getenv("REDIS_URL", "redis://localhost:6379/0")


def use_fake_redis() -> bool:
    url = get_redis_url()
    return os.getenv("USE_FAKE_REDIS", "0") == "1" or url.startswith("memory://") or url.startswith("redis+fake://")


def get_cors_origins() -> list[str]:
    origins_env = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")
    parts: Iterable[str] = (o.strip() for o in origins_env.split(","))
    return [o for o in parts if o]


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    try:
        return int(os.getenv("PORT", "5000"))
    except ValueError:
        return 5000


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO")


def get_log_file() -> str | None:
    return os.getenv("LOG_FILE") or None


def get_api_url() -> str:
    return os.getenv("DEVCONNECT_API_URL", "http://localhost:5000").rstrip("/")


def get_api_timeout_seconds() -> float:
    try:
        return float(os.getenv("DEVCONNECT_API_TIMEOUT", "10"))
    except ValueError:
        return 10.0

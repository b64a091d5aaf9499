# taskboard/config.py
"""Settings loaded from environment variables (+ optional .env).

All variables share the ``TASKBOARD_`` prefix. Nothing here requires a secret
at import time; a missing secret key is replaced by a random per-process one.
"""

import logging
import os
import secrets
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

# bcrypt.gensalt accepts 4..31
BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31

logger = logging.getLogger(__name__)

load_dotenv(override=False)


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_int_range(name: str, default: int, low: int, high: int) -> int:
    value = _env_int(name, default)
    return value if low <= value <= high else default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    app_name: str = "taskboard"
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    data_path: Path = Path(".data/storage.json")

    secret_key: str = ""
    token_ttl_seconds: int = 0
    bcrypt_rounds: int = 12

    api_prefix: str = ""
    cors_origins: tuple = ("http://localhost:3000",)

    host: str = "127.0.0.1"
    port: int = 8000

    @staticmethod
    def from_env() -> "Settings":
        secret_key = _env(_k("SECRET_KEY")).strip()
        if not secret_key:
            logger.warning(
                "%s is not set; using a random key. Issued tokens will not survive a restart.",
                _k("SECRET_KEY"),
            )
            secret_key = secrets.token_urlsafe(48)

        api_prefix = _env(_k("API_PREFIX")).strip().rstrip("/")
        if api_prefix and not api_prefix.startswith("/"):
            api_prefix = "/" + api_prefix

        return Settings(
            app_name=_env(_k("APP_NAME"), "taskboard"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR"), None),
            data_path=_env_path(_k("DATA_PATH"), Path(".data/storage.json")),
            secret_key=secret_key,
            token_ttl_seconds=max(0, _env_int(_k("TOKEN_TTL_SECONDS"), 0)),
            bcrypt_rounds=_env_int_range(_k("BCRYPT_ROUNDS"), 12, BCRYPT_MIN_ROUNDS, BCRYPT_MAX_ROUNDS),
            api_prefix=api_prefix,
            cors_origins=tuple(_env_list(_k("CORS_ORIGINS"), ["http://localhost:3000"])),
            host=_env(_k("HOST"), "127.0.0.1"),
            port=_env_int(_k("PORT"), 8000),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

# src/tududi_cli/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time; missing credentials are reported
  when a command actually needs them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TUDUDI"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Tududi account ----
    api_url: str
    email: str
    password: str

    # ---- HTTP ----
    # None means "wait as long as the server takes".
    timeout_seconds: float | None

    @staticmethod
    def from_env() -> "Settings":
        api_url = _env(_k("API_URL")).strip().rstrip("/")

        timeout = _env_float(_k("TIMEOUT_SECONDS"), None)
        if timeout is not None and timeout <= 0:
            timeout = None

        return Settings(
            app_name=_env(_k("APP_NAME"), "tududi"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/tududi")),
            api_url=api_url,
            email=_env(_k("EMAIL")).strip(),
            password=_env(_k("PASSWORD")),
            timeout_seconds=timeout,
        )

    def missing(self) -> list[str]:
        """Names of required env vars that are not set."""
        out: list[str] = []
        if not self.api_url:
            out.append(_k("API_URL"))
        if not self.email:
            out.append(_k("EMAIL"))
        if not self.password:
            out.append(_k("PASSWORD"))
        return out


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS

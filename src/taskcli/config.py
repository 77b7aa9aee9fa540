# src/taskcli/config.py

"""Settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per invocation, built on demand (easy to test).
- Every variable is optional; blank values count as unset.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import click
from dotenv import load_dotenv

APP_NAME = "taskcli"
ENV_PREFIX = "TASKCLI"
DATA_FILE_NAME = "tasks.json"

# Local .env never overrides variables that are already set.
load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw.strip()).expanduser()


def default_data_dir() -> Path:
    """Per-user application directory for the current platform."""
    return Path(click.get_app_dir(APP_NAME))


@dataclass(frozen=True, slots=True)
class Settings:
    data_file: Path
    log_level: str
    log_file: Path | None

    @property
    def console_log_level(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING

    @staticmethod
    def from_env() -> "Settings":
        data_file = _env_path(_k("DATA_FILE"))
        if data_file is None:
            data_dir = _env_path(_k("DATA_DIR")) or default_data_dir()
            data_file = data_dir / DATA_FILE_NAME

        return Settings(
            data_file=data_file,
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_file=_env_path(_k("LOG_FILE")),
        )


def get_settings() -> Settings:
    return Settings.from_env()

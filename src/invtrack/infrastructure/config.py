"""Runtime configuration read from ``INVTRACK_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

STORAGE_BACKENDS = ("sql", "memory")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """An environment variable holds a value the application cannot use."""


@dataclass(frozen=True)
class Settings:
    storage: str
    database_url: str
    log_level: str
    recent_window: timedelta | None

    @classmethod
    def from_env(cls) -> Settings:
        storage = os.getenv("INVTRACK_STORAGE", "sql").strip().lower()
        if storage not in STORAGE_BACKENDS:
            raise ConfigError(
                f"INVTRACK_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got {storage!r}"
            )

        log_level = os.getenv("INVTRACK_LOG_LEVEL", "WARNING").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"INVTRACK_LOG_LEVEL is not a log level: {log_level!r}")

        return cls(
            storage=storage,
            database_url=os.getenv(
                "INVTRACK_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'invtrack.db'}"
            ),
            log_level=log_level,
            recent_window=_optional_days(os.getenv("INVTRACK_RECENT_WINDOW_DAYS")),
        )


def _optional_days(raw: str | None) -> timedelta | None:
    if raw is None or not raw.strip():
        return None
    try:
        days = int(raw)
    except ValueError as exc:
        raise ConfigError(f"INVTRACK_RECENT_WINDOW_DAYS must be an integer, got {raw!r}") from exc
    if days <= 0:
        raise ConfigError("INVTRACK_RECENT_WINDOW_DAYS must be positive")
    return timedelta(days=days)

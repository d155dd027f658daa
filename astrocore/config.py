"""Runtime configuration read from environment variables (``.env`` is loaded by the app)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass(frozen=True)
class Settings:
    ephemeris_dir: Optional[str] = None
    ephemeris_backend: str = "swieph"
    app_env: Optional[str] = None
    preview_origin: Optional[str] = None
    logging_enabled: bool = False
    auth_enabled: bool = False
    api_keys: List[str] = field(default_factory=list)
    rate_limit_enabled: bool = False
    rate_limit_per_minute: int = 10
    layout_min_separation: float = 6.0
    aspect_limit: int = 8

    @property
    def is_dev(self) -> bool:
        return self.app_env is None or self.app_env.lower() in {"dev", "development"}

    @classmethod
    def from_env(cls) -> "Settings":
        backend = (os.getenv("EPHEMERIS_BACKEND") or "swieph").strip().lower()
        return cls(
            ephemeris_dir=os.getenv("EPHEMERIS_DIR"),
            ephemeris_backend="moseph" if backend == "moseph" else "swieph",
            app_env=os.getenv("APP_ENV"),
            preview_origin=os.getenv("PREVIEW_ORIGIN"),
            logging_enabled=_flag("LOGGING_ENABLED"),
            auth_enabled=_flag("AUTH_ENABLED"),
            api_keys=[k.strip() for k in os.getenv("API_KEYS", "").split(",") if k.strip()],
            rate_limit_enabled=_flag("RATE_LIMIT_ENABLED"),
            rate_limit_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "10")),
            layout_min_separation=_float("LAYOUT_MIN_SEPARATION", 6.0),
            aspect_limit=int(os.getenv("ASPECT_LIMIT", "8")),
        )


def get_settings() -> Settings:
    # Re-read on every call so monkeypatched env vars take effect in tests.
    return Settings.from_env()

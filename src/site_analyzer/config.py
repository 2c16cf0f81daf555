"""Centralized configuration loaded from .env."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _load_env() -> None:
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Relay chain tuning
    relay_delay: float = 1.0  # seconds between relay attempts
    min_markup_chars: int = 100  # shorter payloads are stub/error pages

    # Capture chain tuning
    min_capture_bytes: int = 1000  # smaller images are error thumbnails
    render_enabled: bool = True
    render_settle_seconds: float = 2.0
    render_timeout: float = 10.0
    viewport_width: int = 1200
    viewport_height: int = 800

    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> Settings:
        _load_env()
        return cls(
            relay_delay=float(os.getenv("RELAY_DELAY", "1.0")),
            min_markup_chars=int(os.getenv("MIN_MARKUP_CHARS", "100")),
            min_capture_bytes=int(os.getenv("MIN_CAPTURE_BYTES", "1000")),
            render_enabled=_env_bool("RENDER_ENABLED", True),
            render_settle_seconds=float(os.getenv("RENDER_SETTLE_SECONDS", "2.0")),
            render_timeout=float(os.getenv("RENDER_TIMEOUT", "10.0")),
            user_agent=os.getenv("USER_AGENT", "") or DEFAULT_USER_AGENT,
        )

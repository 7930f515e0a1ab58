from __future__ import annotations
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


def parse_boolean(value: Optional[str]) -> Optional[bool]:
    # only the literal strings count; anything else is unset
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class AppSettings:
    configured: bool = False
    allow_anonymous_recruitment: bool = False
    limit_interviews: bool = False
    initialized_at: Optional[datetime] = None
    installation_id: Optional[str] = None
    disable_analytics: bool = False
    upload_token: Optional[str] = None


def _bool_env(name: str, default: bool) -> bool:
    parsed = parse_boolean(os.getenv(name))
    return default if parsed is None else parsed


def get_app_settings() -> AppSettings:
    return AppSettings(
        configured=_bool_env("CONFIGURED", False),
        allow_anonymous_recruitment=_bool_env("ALLOW_ANONYMOUS_RECRUITMENT", False),
        limit_interviews=_bool_env("LIMIT_INTERVIEWS", False),
        initialized_at=parse_datetime(os.getenv("INITIALIZED_AT")),
        installation_id=os.getenv("INSTALLATION_ID") or None,
        disable_analytics=_bool_env("DISABLE_ANALYTICS", False),
        upload_token=os.getenv("UPLOAD_TOKEN") or None,
    )


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"


def get_logging_config() -> LoggingConfig:
    return LoggingConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())


def get_app_url() -> str:
    return os.getenv("PUBLIC_URL", "http://localhost:3000")

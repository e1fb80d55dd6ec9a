from __future__ import annotations

import os
from dataclasses import dataclass


BOOKMARK_SERVICE_USER_LOCK = "BOOKMARK_SERVICE_USER_LOCK"
BOOKMARK_SERVICE_SITE_URL = "BOOKMARK_SERVICE_SITE_URL"
BOOKMARK_SERVICE_PORT = "BOOKMARK_SERVICE_PORT"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class AppConfig:
    """bookmark-service 전체 설정."""

    user_lock_enabled: bool = True
    site_url: str = ""
    port: int = 8003


def _load_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{name} must be a boolean value if set, got: {raw!r}")


def load_port() -> int:
    raw = os.getenv(BOOKMARK_SERVICE_PORT)
    if not raw:
        return 8003
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(
            f"{BOOKMARK_SERVICE_PORT} must be an integer if set, got: {raw!r}"
        ) from exc


def load_config() -> AppConfig:
    """환경변수에서 bookmark-service 설정을 로드한다."""

    site_url = (os.getenv(BOOKMARK_SERVICE_SITE_URL) or "").strip().rstrip("/")

    return AppConfig(
        user_lock_enabled=_load_bool(BOOKMARK_SERVICE_USER_LOCK, True),
        site_url=site_url,
        port=load_port(),
    )

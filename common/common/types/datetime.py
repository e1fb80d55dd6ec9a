from __future__ import annotations

import time
from datetime import datetime, timezone


def get_millis() -> int:
    """현재 시각을 epoch 기준 밀리초 정수로 반환한다."""
    return time.time_ns() // 1_000_000


def millis_to_datetime(value: int) -> datetime:
    """epoch 밀리초를 UTC datetime 으로 변환한다."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def serialize_datetime_to_utc_iso8601(value: datetime) -> str:
    """모든 datetime을 UTC 기준 ISO8601(+타임존) 문자열로 직렬화한다."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


def format_millis(value: int) -> str:
    """epoch 밀리초를 UTC ISO8601 문자열로 변환한다 (0 은 빈 문자열)."""
    if not value:
        return ""
    return serialize_datetime_to_utc_iso8601(millis_to_datetime(value))

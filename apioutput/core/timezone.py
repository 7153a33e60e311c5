"""时间工具方法：输出层的时间戳一律使用 UTC。"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

# e.g. 2026-10-18T09:30:12.045Z
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def now() -> datetime:
    """返回当前的 UTC 时间。"""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """将时间格式化为 ``YYYY-MM-DDTHH:MM:SS.sssZ``，无时区对象视为 UTC。"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def utc_timestamp(value: Optional[datetime] = None) -> str:
    """返回当前（或给定）时刻的信封时间戳字符串。"""
    return format_timestamp(value if value is not None else now())


def is_timestamp(value: str) -> bool:
    return bool(TIMESTAMP_PATTERN.match(value or ""))

"""
日 K 工具：日期归一化到 UTC 零点，并在 K 线序列中按时间戳精确查找。

时间戳必须完全相等，不会退而取最接近的一根，避免时区导致的错一天。
"""

from datetime import date, datetime, timezone
from typing import Any, Iterable, Sequence, Union

from crypto_ticker.errors import DataNotFound, MalformedResponse

DateLike = Union[date, datetime]


def normalize_day(value: DateLike) -> datetime:
    """取输入的本地日历日期，返回该日期的 UTC 零点。"""
    if isinstance(value, datetime):
        value = value.date()
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def day_timestamp(value: DateLike) -> int:
    return int(normalize_day(value).timestamp())


def find_day_bucket(series: Iterable[Any], timestamp: int, url: str = "") -> Sequence[Any]:
    """线性查找首元素等于 timestamp 的 K 线。

    行格式不对时抛出 MalformedResponse，找不到当天时抛出 DataNotFound。
    """
    for bucket in series:
        if not isinstance(bucket, (list, tuple)) or not bucket:
            raise MalformedResponse(url, f"K 线数据格式错误：{bucket!r}")
        opened = bucket[0]
        if isinstance(opened, int) and not isinstance(opened, bool) and opened == timestamp:
            return bucket
    raise DataNotFound(timestamp)


def bucket_value(bucket: Sequence[Any], index: int, url: str = "") -> float:
    if len(bucket) <= index:
        raise MalformedResponse(url, f"K 线数据格式错误：{list(bucket)}")
    try:
        return float(bucket[index])
    except (TypeError, ValueError):
        raise MalformedResponse(url, f"K 线数值无法解析：{bucket[index]!r}") from None

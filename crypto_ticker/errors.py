"""
错误类型。

- UnsupportedQuery：交易所 / 指标 / 币种名称不受支持（在发起请求前检测）
- TransportError：HTTP 失败、非 2xx 状态码或响应体无法解析为 JSON
- ExchangeApiError：交易所在响应体中报告的业务错误
- MalformedResponse：JSON 解析成功但缺少预期字段
- DataNotFound：历史数据中找不到所请求日期的 K 线
"""

from enum import Enum
from typing import Optional


class TickerError(Exception):
    """所有行情查询错误的基类。"""


class UnsupportedQuery(TickerError, ValueError):
    def __init__(self, exchange: str, metric: Optional[str] = None) -> None:
        self.exchange = exchange
        self.metric = metric
        if metric is None:
            message = f"不支持的交易所：{exchange}"
        else:
            message = f"交易所 {exchange} 不支持指标：{metric}"
        super().__init__(message)


class TransportError(TickerError):
    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"请求 {url} 失败：{reason}")


class ExchangeApiError(TransportError):
    pass


class MalformedResponse(TickerError, ValueError):
    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"API 返回格式错误（{url}）：{detail}")


class DataNotFound(TickerError, ValueError):
    def __init__(self, timestamp: int) -> None:
        self.timestamp = timestamp
        super().__init__(f"未找到时间戳 {timestamp} 对应的日 K 数据")


class ErrorMarker(str, Enum):
    """历史均价函数返回的错误值，便于直接写入单元格。"""

    INVALID_CURRENCY = "Error, invalid currency!"
    DATA_NOT_FOUND = "Error in internal function"
    MISSING_EXCHANGE_RATE = "Error, missing EUR/USD rate!"

    def __str__(self) -> str:
        return self.value

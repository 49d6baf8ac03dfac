from datetime import timedelta
from typing import Dict, Union

from crypto_ticker.config import CANDLE_WINDOW_HOURS, DAILY_GRANULARITY, GDAX_BASE_URL
from crypto_ticker.daily import DateLike, bucket_value, day_timestamp, find_day_bucket, normalize_day
from crypto_ticker.errors import DataNotFound, ErrorMarker, MalformedResponse
from crypto_ticker.fetchers.client import get_json

# 币种名称 -> GDAX 交易对
GDAX_DAILY_PAIRS: Dict[str, str] = {
    "Bitcoin": "BTC-USD",
    "Ether": "ETH-USD",
    "EtherBitcoin": "ETH-BTC",
}
# 计价货币本身，汇率恒为 1
GDAX_QUOTE_CURRENCY = "USD"

# [ time, low, high, open, close, volume ]
_OPEN_INDEX = 3
_CLOSE_INDEX = 4


def build_candles_url(pair: str, day: DateLike) -> str:
    start = normalize_day(day)
    end = start + timedelta(hours=CANDLE_WINDOW_HOURS)
    return (
        f"{GDAX_BASE_URL}/products/{pair}/candles?granularity={DAILY_GRANULARITY}"
        f"&start={start:%Y-%m-%d}&end={end:%Y-%m-%d}"
    )


def fetch_gdax_daily_average(day: DateLike, pair: str) -> float:
    """返回 GDAX 某交易对当天的 (open + close) / 2，当天 K 线缺失时抛出 DataNotFound。"""
    url = build_candles_url(pair, day)
    candles = get_json(url)
    if not isinstance(candles, list):
        raise MalformedResponse(url, f"期望列表，得到 {type(candles).__name__}")

    bucket = find_day_bucket(candles, day_timestamp(day), url)
    return (bucket_value(bucket, _OPEN_INDEX, url) + bucket_value(bucket, _CLOSE_INDEX, url)) / 2


def get_daily_average_simple(day: DateLike, currency_name: str) -> Union[float, ErrorMarker]:
    """
    查询某币种在指定日期相对 USD 的均价（非成交量加权），数据来自 GDAX。

    Args:
        day: 日期，按其日历日取 UTC 当天
        currency_name: Bitcoin、Ether、EtherBitcoin 或 USD

    Returns:
        当天均价；币种无效时返回 ErrorMarker.INVALID_CURRENCY，
        当天 K 线缺失时返回 ErrorMarker.DATA_NOT_FOUND
    """
    if currency_name == GDAX_QUOTE_CURRENCY:
        return 1.0

    pair = GDAX_DAILY_PAIRS.get(currency_name)
    if pair is None:
        return ErrorMarker.INVALID_CURRENCY

    try:
        return fetch_gdax_daily_average(day, pair)
    except DataNotFound:
        return ErrorMarker.DATA_NOT_FOUND

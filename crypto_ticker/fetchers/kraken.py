from typing import Dict, Optional, Union

from crypto_ticker.config import DAILY_GRANULARITY, KRAKEN_BASE_URL
from crypto_ticker.daily import DateLike, bucket_value, day_timestamp, find_day_bucket
from crypto_ticker.errors import DataNotFound, ErrorMarker, MalformedResponse
from crypto_ticker.fetchers.client import check_api_error, get_json

# 币种名称 -> Kraken 交易对
KRAKEN_DAILY_PAIRS: Dict[str, str] = {
    "Bitcoin": "XXBTZEUR",
    "Ether": "XETHZEUR",
    "EtherBitcoin": "XETHXXBT",
    "Tether": "USDTZUSD",
}
# 以 USD 计价的交易对，结果需除以 EUR/USD 汇率
USD_QUOTED_PAIRS = frozenset({"USDTZUSD"})
KRAKEN_QUOTE_CURRENCY = "Euro"

# [ time, open, high, low, close, vwap, volume, count ]
_VWAP_INDEX = 5


def build_ohlc_url(pair: str) -> str:
    # Kraken 的 interval 单位是分钟；接口不支持按日期过滤
    return f"{KRAKEN_BASE_URL}/0/public/OHLC?pair={pair}&interval={DAILY_GRANULARITY // 60}"


def fetch_kraken_daily_vwap(day: DateLike, pair: str) -> float:
    """扫描 Kraken 返回的完整日 K 序列，取指定日期的 VWAP。"""
    url = build_ohlc_url(pair)
    data = get_json(url)
    check_api_error("KRAKEN", data, url)

    result = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result, dict) or not isinstance(result.get(pair), list):
        raise MalformedResponse(url, f"缺少 result.{pair} 序列")

    bucket = find_day_bucket(result[pair], day_timestamp(day), url)
    return bucket_value(bucket, _VWAP_INDEX, url)


def get_daily_average_volume_weighted(
    day: DateLike,
    currency_name: str,
    eur_usd_rate: Optional[float] = None,
) -> Union[float, ErrorMarker]:
    """
    查询某币种在指定日期相对欧元的成交量加权均价，数据来自 Kraken。

    Tether 只有 USD 交易对，需要传入 eur_usd_rate（1 EUR 兑多少 USD）进行换算。
    """
    if currency_name == KRAKEN_QUOTE_CURRENCY:
        return 1.0

    pair = KRAKEN_DAILY_PAIRS.get(currency_name)
    if pair is None:
        return ErrorMarker.INVALID_CURRENCY
    if pair in USD_QUOTED_PAIRS and not (eur_usd_rate and eur_usd_rate > 0):
        return ErrorMarker.MISSING_EXCHANGE_RATE

    try:
        vwap = fetch_kraken_daily_vwap(day, pair)
    except DataNotFound:
        return ErrorMarker.DATA_NOT_FOUND

    if pair in USD_QUOTED_PAIRS:
        vwap /= eur_usd_rate
    return vwap

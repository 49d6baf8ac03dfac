"""
通用行情查询：注册表条目 -> URL -> 一次 GET -> 按字段路径取值。
"""

from typing import Any, Sequence

import httpx

from crypto_ticker.errors import MalformedResponse
from crypto_ticker.fetchers.client import check_api_error, get_json, get_json_async
from crypto_ticker.registry import PAIR, Derivation, PathKey, RegistryEntry, resolve


def build_url(entry: RegistryEntry, pair: str) -> str:
    # 原样插入，交易对的大小写和分隔符由调用方负责
    return entry.url_template.format(pair=pair)


def _walk(node: Any, path: Sequence[PathKey], pair: str, url: str) -> Any:
    for key in path:
        if key is PAIR:
            key = pair
        if isinstance(key, int):
            if not isinstance(node, list) or not -len(node) <= key < len(node):
                raise MalformedResponse(url, f"缺少下标 [{key}]")
        elif not isinstance(node, dict) or key not in node:
            raise MalformedResponse(url, f"缺少字段 {key!r}")
        node = node[key]
    return node


def _to_float(value: Any, url: str) -> float:
    if value is None or isinstance(value, bool):
        raise MalformedResponse(url, f"数值字段为空或类型错误：{value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedResponse(url, f"无法解析为数字：{value!r}") from None


def extract_value(entry: RegistryEntry, data: Any, pair: str, url: str = "") -> float:
    """从已解析的 JSON 中按条目取出数值，不涉及网络。"""
    lookup_pair = pair.lower() if entry.lowercase_pair else pair
    node = _walk(data, entry.field_path, lookup_pair, url)

    if entry.derivation is Derivation.AVERAGE_OF_HIGH_LOW:
        high_key, low_key = entry.operands
        high = _to_float(_walk(node, (high_key,), lookup_pair, url), url)
        low = _to_float(_walk(node, (low_key,), lookup_pair, url), url)
        return round((high + low) / 2, 8)

    if entry.derivation is Derivation.INDEXED_LOOKUP:
        node = _walk(node, (entry.index,), lookup_pair, url)

    return _to_float(node, url)


def get_ticker(exchange: str, metric: str, pair: str) -> float:
    """获取指定交易所某个交易对的行情指标。

    Args:
        exchange: GDAX、Poloniex、Kraken、Bittrex、Liqui、Etherscan、Coinmarketcap（CMC）
        metric: Last、Ask、Bid、High、Low、Average、Volume、QuoteVolume 等
        pair: 交易所自身格式的交易对，例如 GDAX 'ETH-USD'、Poloniex 'BTC_ETH'、
            Kraken 'XXBTZEUR'、Liqui 'wings_btc'、Bittrex 'BTC-WINGS'、
            Etherscan 'ethusd'、Coinmarketcap 'ethereum'

    Raises:
        UnsupportedQuery: 交易所或指标不受支持（不会发起请求）
        TransportError: 请求失败或响应不是 JSON
        MalformedResponse: 响应中缺少对应字段
    """
    entry = resolve(exchange, metric)
    url = build_url(entry, pair)
    data = get_json(url)
    check_api_error(entry.exchange, data, url)
    return extract_value(entry, data, pair, url)


async def get_ticker_async(
    client: httpx.AsyncClient,
    exchange: str,
    metric: str,
    pair: str,
) -> float:
    entry = resolve(exchange, metric)
    url = build_url(entry, pair)
    data = await get_json_async(client, url)
    check_api_error(entry.exchange, data, url)
    return extract_value(entry, data, pair, url)


def get_eth_usd_last() -> float:
    """GDAX 上 ETH/USD 的最新成交价。"""
    return get_ticker("GDAX", "LAST", "ETH-USD")

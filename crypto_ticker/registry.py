"""
交易所注册表。

把 (交易所, 指标) 映射为一条静态的 RegistryEntry：
请求 URL 模板、JSON 字段路径以及取值方式（直接取值 / 高低价均值 / 数组下标）。
交易所与指标名称均不区分大小写，指标支持同义词（例如 LAST 与 PRICE）。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union

from crypto_ticker.config import (
    BITTREX_BASE_URL,
    COINMARKETCAP_BASE_URL,
    ETHERSCAN_BASE_URL,
    GDAX_BASE_URL,
    KRAKEN_BASE_URL,
    LIQUI_BASE_URL,
    POLONIEX_BASE_URL,
)
from crypto_ticker.errors import UnsupportedQuery


class Derivation(str, Enum):
    IDENTITY = "identity"
    AVERAGE_OF_HIGH_LOW = "average_of_high_low"
    INDEXED_LOOKUP = "indexed_lookup"


class _PairPlaceholder:
    """字段路径中的占位符，取值时替换为交易对。"""

    def __repr__(self) -> str:
        return "PAIR"


PAIR = _PairPlaceholder()

PathKey = Union[str, int, _PairPlaceholder]


@dataclass(frozen=True)
class RegistryEntry:
    exchange: str
    metric: str
    url_template: str
    field_path: Tuple[PathKey, ...]
    derivation: Derivation = Derivation.IDENTITY
    # AVERAGE_OF_HIGH_LOW：field_path 指向的对象中的 (high, low) 字段名
    operands: Tuple[str, str] = ("high", "low")
    # INDEXED_LOOKUP：field_path 指向的数组下标
    index: Optional[int] = None
    # 字段路径中的交易对是否转小写（Etherscan）
    lowercase_pair: bool = False


# 指标同义词 -> 规范名称
METRIC_SYNONYMS: Dict[str, str] = {
    "LAST": "LAST",
    "PRICE": "LAST",
    "ASK": "ASK",
    "SELL": "ASK",
    "BID": "BID",
    "BUY": "BID",
    "HIGH": "HIGH",
    "LOW": "LOW",
    "AVG": "AVERAGE",
    "AVERAGE": "AVERAGE",
    "VOL": "VOLUME",
    "VOLUME": "VOLUME",
    "BASEVOLUME": "VOLUME",
    "QUOTEVOLUME": "QUOTE_VOLUME",
    "VOLUME_CURRENCY": "QUOTE_VOLUME",
    "VOL_CUR": "QUOTE_VOLUME",
    "VOL_30D": "VOLUME_30DAY",
    "VOLUME_30DAY": "VOLUME_30DAY",
    "PERCENTCHANGE": "PERCENT_CHANGE",
}

EXCHANGE_ALIASES: Dict[str, str] = {
    "GDAX": "GDAX",
    "COINBASE": "GDAX",
    "POLONIEX": "POLONIEX",
    "KRAKEN": "KRAKEN",
    "LIQUI": "LIQUI",
    "BITTREX": "BITTREX",
    "ETHERSCAN": "ETHERSCAN",
    "COINMARKETCAP": "COINMARKETCAP",
    "CMC": "COINMARKETCAP",
}


def _simple(
    exchange: str,
    url_template: str,
    prefix: Tuple[PathKey, ...],
    fields: Dict[str, str],
) -> Dict[str, RegistryEntry]:
    """为“对象中直接取字段”的指标批量生成条目。"""
    return {
        metric: RegistryEntry(exchange, metric, url_template, prefix + (field,))
        for metric, field in fields.items()
    }


def _average(
    exchange: str,
    url_template: str,
    prefix: Tuple[PathKey, ...],
    high: str,
    low: str,
) -> RegistryEntry:
    return RegistryEntry(
        exchange,
        "AVERAGE",
        url_template,
        prefix,
        Derivation.AVERAGE_OF_HIGH_LOW,
        operands=(high, low),
    )


def _gdax() -> Dict[str, RegistryEntry]:
    ticker = f"{GDAX_BASE_URL}/products/{{pair}}/ticker"
    stats = f"{GDAX_BASE_URL}/products/{{pair}}/stats"
    entries = _simple(
        "GDAX",
        ticker,
        (),
        {"LAST": "price", "ASK": "ask", "BID": "bid", "VOLUME": "volume"},
    )
    entries.update(
        _simple(
            "GDAX",
            stats,
            (),
            {"HIGH": "high", "LOW": "low", "VOLUME_30DAY": "volume_30day"},
        )
    )
    # 非成交量加权
    entries["AVERAGE"] = _average("GDAX", stats, (), "high", "low")
    return entries


def _poloniex() -> Dict[str, RegistryEntry]:
    # 一次返回全部交易对，按交易对取值
    url = f"{POLONIEX_BASE_URL}/public?command=returnTicker"
    entries = _simple(
        "POLONIEX",
        url,
        (PAIR,),
        {
            "LAST": "last",
            "ASK": "lowestAsk",
            "BID": "highestBid",
            "HIGH": "high24hr",
            "LOW": "low24hr",
            "VOLUME": "baseVolume",
            "QUOTE_VOLUME": "quoteVolume",
            "PERCENT_CHANGE": "percentChange",
        },
    )
    entries["AVERAGE"] = _average("POLONIEX", url, (PAIR,), "high24hr", "low24hr")
    return entries


def _kraken() -> Dict[str, RegistryEntry]:
    url = f"{KRAKEN_BASE_URL}/0/public/Ticker?pair={{pair}}"
    # 数组下标：0 = 当前值，1 = 最近 24 小时
    fields = {
        "LAST": ("c", 0),
        "ASK": ("a", 0),
        "BID": ("b", 0),
        "HIGH": ("h", 1),
        "LOW": ("l", 1),
        "AVERAGE": ("p", 1),  # 成交量加权
        "VOLUME": ("v", 1),
    }
    return {
        metric: RegistryEntry(
            "KRAKEN",
            metric,
            url,
            ("result", PAIR, field),
            Derivation.INDEXED_LOOKUP,
            index=index,
        )
        for metric, (field, index) in fields.items()
    }


def _liqui() -> Dict[str, RegistryEntry]:
    return _simple(
        "LIQUI",
        f"{LIQUI_BASE_URL}/api/3/ticker/{{pair}}",
        (PAIR,),
        {
            "LAST": "last",
            "ASK": "sell",
            "BID": "buy",
            "HIGH": "high",
            "LOW": "low",
            "AVERAGE": "avg",
            "VOLUME": "vol",
            "QUOTE_VOLUME": "vol_cur",
        },
    )


def _bittrex() -> Dict[str, RegistryEntry]:
    url = f"{BITTREX_BASE_URL}/api/v1.1/public/getmarketsummary?market={{pair}}"
    entries = _simple(
        "BITTREX",
        url,
        ("result", 0),
        {
            "LAST": "Last",
            "ASK": "Ask",
            "BID": "Bid",
            "HIGH": "High",
            "LOW": "Low",
            "VOLUME": "BaseVolume",
            "QUOTE_VOLUME": "Volume",
        },
    )
    entries["AVERAGE"] = _average("BITTREX", url, ("result", 0), "High", "Low")
    return entries


def _etherscan() -> Dict[str, RegistryEntry]:
    return {
        "LAST": RegistryEntry(
            "ETHERSCAN",
            "LAST",
            f"{ETHERSCAN_BASE_URL}/api?module=stats&action=ethprice",
            ("result", PAIR),
            lowercase_pair=True,
        )
    }


COINMARKETCAP_FIELDS = (
    "price_usd",
    "price_btc",
    "24h_volume_usd",
    "market_cap_usd",
    "available_supply",
    "total_supply",
    "max_supply",
    "percent_change_1h",
    "percent_change_24h",
    "percent_change_7d",
    "rank",
)


def _coinmarketcap() -> Dict[str, RegistryEntry]:
    # pair 实际上是单个币种 id，例如 ethereum
    url = f"{COINMARKETCAP_BASE_URL}/v1/ticker/{{pair}}/"
    fields = {field.upper(): field for field in COINMARKETCAP_FIELDS}
    fields.update(
        {
            "LAST": "price_usd",
            "VOLUME": "24h_volume_usd",
            "PERCENT_CHANGE": "percent_change_24h",
        }
    )
    return _simple("COINMARKETCAP", url, (0,), fields)


REGISTRY: Dict[str, Dict[str, RegistryEntry]] = {
    "GDAX": _gdax(),
    "POLONIEX": _poloniex(),
    "KRAKEN": _kraken(),
    "LIQUI": _liqui(),
    "BITTREX": _bittrex(),
    "ETHERSCAN": _etherscan(),
    "COINMARKETCAP": _coinmarketcap(),
}

EXCHANGES: Tuple[str, ...] = tuple(REGISTRY)


def normalize_exchange(exchange: str) -> str:
    """返回交易所的规范名称，未知交易所抛出 UnsupportedQuery。"""
    key = EXCHANGE_ALIASES.get(str(exchange).strip().upper())
    if key is None:
        raise UnsupportedQuery(exchange)
    return key


def supported_metrics(exchange: str) -> FrozenSet[str]:
    return frozenset(REGISTRY[normalize_exchange(exchange)])


def resolve(exchange: str, metric: str) -> RegistryEntry:
    """查找 (交易所, 指标) 对应的注册表条目。

    不发起任何网络请求；交易所或指标不受支持时抛出 UnsupportedQuery。
    """
    table = REGISTRY[normalize_exchange(exchange)]
    name = str(metric).strip().upper()
    entry = table.get(METRIC_SYNONYMS.get(name, name))
    if entry is None:
        raise UnsupportedQuery(exchange, metric)
    return entry

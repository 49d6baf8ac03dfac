from .gdax import fetch_gdax_daily_average, get_daily_average_simple
from .kraken import fetch_kraken_daily_vwap, get_daily_average_volume_weighted
from .ticker import get_eth_usd_last, get_ticker, get_ticker_async

__all__ = [
    "get_ticker",
    "get_ticker_async",
    "get_eth_usd_last",
    "get_daily_average_simple",
    "get_daily_average_volume_weighted",
    "fetch_gdax_daily_average",
    "fetch_kraken_daily_vwap",
]

from typing import Any

import httpx
import requests

from crypto_ticker.config import REQUEST_TIMEOUT
from crypto_ticker.errors import ExchangeApiError, TransportError


def get_json(url: str) -> Any:
    """发起一次阻塞 GET 请求并解析 JSON，失败时抛出 TransportError。"""
    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise TransportError(url, str(exc)) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise TransportError(url, f"响应不是合法 JSON：{exc}") from exc


async def get_json_async(client: httpx.AsyncClient, url: str) -> Any:
    try:
        response = await client.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise TransportError(url, str(exc)) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise TransportError(url, f"响应不是合法 JSON：{exc}") from exc


def check_api_error(exchange: str, data: Any, url: str) -> None:
    """部分交易所在 HTTP 200 的响应体里报告错误，这里统一转为 ExchangeApiError。"""
    if not isinstance(data, dict):
        return

    if exchange == "KRAKEN":
        errors = data.get("error")
        if errors:
            raise ExchangeApiError(url, "; ".join(str(e) for e in errors))
    elif exchange == "BITTREX":
        if data.get("success") is False:
            raise ExchangeApiError(url, data.get("message") or "未知错误")

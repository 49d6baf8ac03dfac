"""
把表格中的交易 ID / 地址改写为区块浏览器超链接公式。

- 0x 开头、长度 66：以太坊交易
- 0x 开头、长度 42：以太坊地址
- 长度 64：比特币交易
"""

from typing import Any, List, Optional, Sequence

from crypto_ticker.config import (
    BITCOIN_EXPLORER_URL,
    COMMA_DECIMAL_LOCALES,
    ETHERSCAN_EXPLORER_URL,
)

ETH_TX_LENGTH = 66
ETH_ADDRESS_LENGTH = 42
BTC_TX_LENGTH = 64


def formula_separator(locale: Optional[str]) -> str:
    """小数点为逗号的区域里，公式参数用分号分隔。"""
    return ";" if locale in COMMA_DECIMAL_LOCALES else ","


def _hyperlink(url: str, label: str, separator: str) -> str:
    return f'=HYPERLINK("{url}"{separator}"{label}")'


def explorer_formula(value: str, separator: str = ",") -> Optional[str]:
    """返回对应的 HYPERLINK 公式；无法识别的值返回 None。"""
    if value.startswith("0x"):
        if len(value) == ETH_TX_LENGTH:
            return _hyperlink(f"{ETHERSCAN_EXPLORER_URL}/tx/{value}", f"ETH-TXID: {value}", separator)
        if len(value) == ETH_ADDRESS_LENGTH:
            return _hyperlink(
                f"{ETHERSCAN_EXPLORER_URL}/address/{value}", f"ETH-ADDR: {value}", separator
            )
        return None
    if len(value) == BTC_TX_LENGTH:
        return _hyperlink(f"{BITCOIN_EXPLORER_URL}/tx/{value}", f"BTC-TXID: {value}", separator)
    return None


def update_hyperlinks(rows: Sequence[Sequence[Any]], locale: Optional[str] = None) -> List[List[Any]]:
    """返回改写后的新二维列表，空白和非字符串单元格保持不变。"""
    separator = formula_separator(locale)
    updated: List[List[Any]] = []
    for row in rows:
        new_row: List[Any] = []
        for cell in row:
            formula = explorer_formula(cell, separator) if isinstance(cell, str) and cell else None
            new_row.append(formula if formula is not None else cell)
        updated.append(new_row)
    return updated

"""
加密货币行情命令行工具。

功能：
- ticker：查询任一受支持交易所的行情指标，多个交易对并发请求
- average：查询单日均价（GDAX 简单均价 / Kraken 成交量加权均价）
- hyperlinks：把 CSV 中的交易 ID / 地址改写为区块浏览器超链接公式

示例：
    crypto-ticker ticker --exchange GDAX --metric last --pairs ETH-USD,BTC-USD
    crypto-ticker average --date 2021-03-01 --currency Bitcoin --method vwap
    crypto-ticker hyperlinks wallet.csv --output wallet_links.csv --locale de_DE
"""

import argparse
import asyncio
import csv
import sys
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import httpx

from crypto_ticker.errors import ErrorMarker, TickerError
from crypto_ticker.fetchers import (
    get_daily_average_simple,
    get_daily_average_volume_weighted,
    get_ticker,
    get_ticker_async,
)
from crypto_ticker.hyperlinks import update_hyperlinks
from crypto_ticker.registry import EXCHANGES, resolve


def parse_date(text: str) -> date:
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"日期格式错误：{text}（应为 YYYY-MM-DD）") from None


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """解析命令行参数。"""
    parser = argparse.ArgumentParser(description="从多个交易所公共 API 获取并统一行情数据")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ticker = subparsers.add_parser("ticker", help="查询行情指标")
    ticker.add_argument(
        "--exchange",
        default="GDAX",
        help=f"交易所（不区分大小写）：{', '.join(EXCHANGES)}，默认 GDAX",
    )
    ticker.add_argument("--metric", default="last", help="指标，如 last、ask、bid、high、low、average、volume")
    ticker.add_argument(
        "--pairs",
        nargs="+",
        default=["ETH-USD"],
        help="交易所格式的交易对，多个用逗号或空格分隔，默认 ETH-USD",
    )
    ticker.set_defaults(handler=run_ticker)

    average = subparsers.add_parser("average", help="查询单日均价")
    average.add_argument("--date", type=parse_date, required=True, help="日期，格式 YYYY-MM-DD")
    average.add_argument("--currency", required=True, help="币种名称，如 Bitcoin、Ether、EtherBitcoin")
    average.add_argument(
        "--method",
        choices=["simple", "vwap"],
        default="simple",
        help="simple：GDAX (open+close)/2，对 USD；vwap：Kraken 成交量加权，对 EUR",
    )
    average.add_argument("--eur-usd", type=float, help="EUR/USD 汇率，vwap 查询 Tether 时必填")
    average.set_defaults(handler=run_average)

    links = subparsers.add_parser("hyperlinks", help="把 CSV 中的交易 ID / 地址改写为超链接公式")
    links.add_argument("input", type=Path, help="输入 CSV 文件")
    links.add_argument("--output", type=Path, help="输出 CSV 文件，默认输出到标准输出")
    links.add_argument("--locale", help="表格区域设置，如 de_DE（决定公式参数分隔符）")
    links.set_defaults(handler=run_hyperlinks)

    return parser.parse_args(argv)


def split_values(raw_list: Sequence[str]) -> List[str]:
    """处理参数列表，支持 "A B,C D" 这种混合格式。"""
    values: List[str] = []
    for item in raw_list:
        for part in item.replace(",", " ").split():
            cleaned = part.strip()
            if cleaned:
                values.append(cleaned)
    return values


def main(argv: Optional[Sequence[str]] = None) -> None:
    """主函数：解析参数并分发到子命令。"""
    try:
        args = parse_args(argv)
        args.handler(args)
    except Exception as exc:  # pragma: no cover - 顶层兜底
        print(f"执行失败：{exc}", file=sys.stderr)
        sys.exit(1)


def run_ticker(args: argparse.Namespace) -> None:
    pairs = split_values(args.pairs)
    if not pairs:
        raise ValueError("请使用 --pairs 指定至少一个交易对。")

    # 先校验交易所和指标，避免无效请求
    resolve(args.exchange, args.metric)

    if len(pairs) == 1:
        print(f"{pairs[0]}: {get_ticker(args.exchange, args.metric, pairs[0])}")
        return

    results = asyncio.run(_run_ticker_batch(args.exchange, args.metric, pairs))
    successes = sum(1 for ok, _ in results if ok)
    failures = [msg for ok, msg in results if not ok]

    if successes == 0:
        print("所有交易对查询失败，请检查参数或网络。", file=sys.stderr)
        sys.exit(1)

    if failures:
        print(f"\n批量完成：成功 {successes} 个，失败 {len(failures)} 个。")
        print("失败详情：")
        for item in failures:
            print(f"  - {item}")


async def _run_ticker_batch(exchange: str, metric: str, pairs: List[str]) -> List[Tuple[bool, str]]:
    async with httpx.AsyncClient() as client:

        async def _worker(pair: str) -> Tuple[bool, str]:
            try:
                value = await get_ticker_async(client, exchange, metric, pair)
            except TickerError as exc:
                print(f"[{pair}] 获取行情失败：{exc}", file=sys.stderr)
                return False, f"{pair}: {exc}"
            print(f"{pair}: {value}")
            return True, ""

        return await asyncio.gather(*(_worker(pair) for pair in pairs))


def run_average(args: argparse.Namespace) -> None:
    if args.method == "simple":
        result = get_daily_average_simple(args.date, args.currency)
    else:
        result = get_daily_average_volume_weighted(args.date, args.currency, args.eur_usd)

    label = f"{args.currency} @ {args.date:%Y-%m-%d}"
    if isinstance(result, ErrorMarker):
        print(f"{label}: {result}", file=sys.stderr)
        sys.exit(1)
    print(f"{label}: {result}")


def run_hyperlinks(args: argparse.Namespace) -> None:
    with args.input.open("r", encoding="utf-8", newline="") as fp:
        rows = list(csv.reader(fp))

    updated = update_hyperlinks(rows, args.locale)

    if args.output is None:
        csv.writer(sys.stdout).writerows(updated)
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8", newline="") as fp:
        csv.writer(fp).writerows(updated)
    print(f"已写入 {args.output}，共 {len(updated)} 行。")


if __name__ == "__main__":
    main()

"""
行情查询脚本入口（未安装包时也可直接运行）。

用法见 crypto_ticker/cli.py，例如：
    python scripts/ticker_fetcher.py ticker --exchange Kraken --metric volume --pairs XXBTZEUR
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from crypto_ticker.cli import main


if __name__ == "__main__":
    main()

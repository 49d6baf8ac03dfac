# 各交易所基础 URL
GDAX_BASE_URL = "https://api.gdax.com"
POLONIEX_BASE_URL = "https://poloniex.com"
KRAKEN_BASE_URL = "https://api.kraken.com"
LIQUI_BASE_URL = "https://api.liqui.io"
BITTREX_BASE_URL = "https://bittrex.com"
ETHERSCAN_BASE_URL = "https://api.etherscan.io"
COINMARKETCAP_BASE_URL = "https://api.coinmarketcap.com"

# 区块浏览器
ETHERSCAN_EXPLORER_URL = "https://etherscan.io"
BITCOIN_EXPLORER_URL = "https://tradeblock.com/bitcoin"

REQUEST_TIMEOUT = 30

# 日线粒度（秒）
DAILY_GRANULARITY = 86400
# 日 K 查询窗口：24h + 2h 余量，兼容夏令时切换
CANDLE_WINDOW_HOURS = 24 + 2

# 使用逗号作为小数点的表格区域，公式参数分隔符需改为分号
COMMA_DECIMAL_LOCALES = frozenset({"de_DE"})

"""
crypto_ticker
~~~~~~~~~~~~~

核心业务包：
- 交易所注册表：把 (交易所, 指标) 映射到 URL 与字段路径
- 行情查询（GDAX / Poloniex / Kraken / Liqui / Bittrex / Etherscan / Coinmarketcap）
- 单日均价（GDAX 简单均价、Kraken 成交量加权均价）
- 区块浏览器超链接改写

命令行入口：
- scripts/ticker_fetcher.py
- crypto-ticker（安装后）
"""

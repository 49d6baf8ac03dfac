"""
Tests for crypto_ticker/hyperlinks.py
"""

from crypto_ticker.hyperlinks import explorer_formula, formula_separator, update_hyperlinks

ETH_TX = "0x" + "ab" * 32
ETH_ADDR = "0x" + "1f" * 20
BTC_TX = "cd" * 32


class TestFormulaSeparator:
    def test_comma_decimal_locale(self):
        assert formula_separator("de_DE") == ";"

    def test_default(self):
        assert formula_separator("en_US") == ","
        assert formula_separator(None) == ","


class TestExplorerFormula:
    """交易 ID / 地址识别"""

    def test_eth_transaction(self):
        assert explorer_formula(ETH_TX) == (
            f'=HYPERLINK("https://etherscan.io/tx/{ETH_TX}","ETH-TXID: {ETH_TX}")'
        )

    def test_eth_address(self):
        assert explorer_formula(ETH_ADDR, ";") == (
            f'=HYPERLINK("https://etherscan.io/address/{ETH_ADDR}";"ETH-ADDR: {ETH_ADDR}")'
        )

    def test_btc_transaction(self):
        assert explorer_formula(BTC_TX) == (
            f'=HYPERLINK("https://tradeblock.com/bitcoin/tx/{BTC_TX}","BTC-TXID: {BTC_TX}")'
        )

    def test_0x_with_other_length_is_ignored(self):
        """0x 开头且长度为 64 的值既不是以太坊交易，也不按比特币交易处理。"""
        assert explorer_formula("0x" + "a" * 62) is None
        assert explorer_formula("0x1234") is None

    def test_plain_text_is_ignored(self):
        assert explorer_formula("Kraken deposit") is None


class TestUpdateHyperlinks:
    def test_rewrites_only_recognized_cells(self):
        rows = [["date", "txid", "amount"], ["2021-03-01", ETH_TX, 1.5], ["", BTC_TX, None]]

        updated = update_hyperlinks(rows, "de_DE")

        assert updated[0] == ["date", "txid", "amount"]
        assert updated[1][0] == "2021-03-01"
        assert updated[1][1].startswith('=HYPERLINK("https://etherscan.io/tx/')
        assert '";"ETH-TXID: ' in updated[1][1]
        assert updated[1][2] == 1.5
        assert updated[2][0] == ""
        assert updated[2][1].startswith('=HYPERLINK("https://tradeblock.com/bitcoin/tx/')
        assert updated[2][2] is None

    def test_input_is_not_mutated(self):
        rows = [[ETH_ADDR]]
        update_hyperlinks(rows)
        assert rows == [[ETH_ADDR]]

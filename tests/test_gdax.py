"""
Tests for crypto_ticker/fetchers/gdax.py
"""

from datetime import date

import pytest
import requests

from conftest import make_response
from crypto_ticker.errors import ErrorMarker, MalformedResponse, TransportError
from crypto_ticker.fetchers.gdax import build_candles_url, get_daily_average_simple

MARCH_1 = 1614556800
MARCH_2 = 1614643200


class TestBuildCandlesUrl:
    def test_window_covers_next_day(self):
        url = build_candles_url("BTC-USD", date(2021, 3, 1))
        assert url == (
            "https://api.gdax.com/products/BTC-USD/candles?granularity=86400"
            "&start=2021-03-01&end=2021-03-02"
        )

    def test_month_boundary(self):
        assert build_candles_url("ETH-USD", date(2021, 2, 28)).endswith("&start=2021-02-28&end=2021-03-01")


class TestGetDailyAverageSimple:
    """GDAX 单日简单均价"""

    def test_open_close_average(self, mock_get):
        # [ time, low, high, open, close, volume ]
        mock_get.return_value = make_response([[MARCH_1, 10, 40, 30, 20, 123.4]])

        assert get_daily_average_simple(date(2021, 3, 1), "Bitcoin") == 25.0
        assert "/products/BTC-USD/candles" in mock_get.call_args.args[0]

    def test_finds_day_among_several_buckets(self, mock_get):
        mock_get.return_value = make_response(
            [[MARCH_2, 1, 1, 1, 1, 1], [MARCH_1, "1800", "1900", "1850.5", "1849.5", "10"]]
        )

        assert get_daily_average_simple(date(2021, 3, 1), "Ether") == 1850.0

    def test_wrong_day_is_data_not_found(self, mock_get):
        mock_get.return_value = make_response([[MARCH_2, 10, 40, 30, 20, 1]])

        assert get_daily_average_simple(date(2021, 3, 1), "Ether") is ErrorMarker.DATA_NOT_FOUND

    def test_usd_is_identity(self, mock_get):
        assert get_daily_average_simple(date(2021, 3, 1), "USD") == 1.0
        mock_get.assert_not_called()

    def test_invalid_currency(self, mock_get):
        result = get_daily_average_simple(date(2021, 3, 1), "Dogecoin")
        assert result is ErrorMarker.INVALID_CURRENCY
        assert str(result) == "Error, invalid currency!"
        mock_get.assert_not_called()

    def test_ether_bitcoin_pair(self, mock_get):
        mock_get.return_value = make_response([[MARCH_1, 0.03, 0.04, "0.031", "0.033", 5]])

        assert get_daily_average_simple(date(2021, 3, 1), "EtherBitcoin") == pytest.approx(0.032)
        assert "/products/ETH-BTC/" in mock_get.call_args.args[0]

    def test_short_bucket_is_malformed(self, mock_get):
        mock_get.return_value = make_response([[MARCH_1, 10, 20, 30]])

        with pytest.raises(MalformedResponse):
            get_daily_average_simple(date(2021, 3, 1), "Bitcoin")

    def test_error_object_is_malformed(self, mock_get):
        mock_get.return_value = make_response({"message": "Invalid end"})

        with pytest.raises(MalformedResponse):
            get_daily_average_simple(date(2021, 3, 1), "Bitcoin")

    def test_transport_error_propagates(self, mock_get):
        mock_get.side_effect = requests.Timeout("timed out")

        with pytest.raises(TransportError):
            get_daily_average_simple(date(2021, 3, 1), "Bitcoin")

    def test_object_rows_are_malformed(self, mock_get):
        mock_get.return_value = make_response([{"time": MARCH_1, "open": "30", "close": "20"}])

        with pytest.raises(MalformedResponse):
            get_daily_average_simple(date(2021, 3, 1), "Bitcoin")

"""
Tests for crypto_ticker/daily.py
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from crypto_ticker.daily import bucket_value, day_timestamp, find_day_bucket, normalize_day
from crypto_ticker.errors import DataNotFound, MalformedResponse

MARCH_1 = 1614556800
MARCH_2 = 1614643200


class TestNormalizeDay:
    """日期归一化到 UTC 零点"""

    def test_date(self):
        assert normalize_day(date(2021, 3, 1)) == datetime(2021, 3, 1, tzinfo=timezone.utc)
        assert day_timestamp(date(2021, 3, 1)) == MARCH_1

    def test_naive_local_midnight(self):
        assert day_timestamp(datetime(2021, 3, 1)) == MARCH_1

    def test_time_of_day_is_dropped(self):
        assert day_timestamp(datetime(2021, 3, 1, 23, 59, 59)) == MARCH_1

    def test_aware_datetime_keeps_its_wall_date(self):
        """UTC+9 的 3 月 1 日零点在 UTC 仍是 2 月 28 日，但取的是其本地日历日。"""
        tokyo = timezone(timedelta(hours=9))
        assert day_timestamp(datetime(2021, 3, 1, 0, 30, tzinfo=tokyo)) == MARCH_1

    def test_negative_offset(self):
        new_york = timezone(timedelta(hours=-5))
        assert day_timestamp(datetime(2021, 3, 1, 22, 0, tzinfo=new_york)) == MARCH_1


class TestFindDayBucket:
    """按时间戳精确查找"""

    def test_exact_match(self):
        series = [[MARCH_2, 1, 2], [MARCH_1, 3, 4]]
        assert find_day_bucket(series, MARCH_1) == [MARCH_1, 3, 4]

    def test_nearest_bucket_is_rejected(self):
        with pytest.raises(DataNotFound) as exc_info:
            find_day_bucket([[MARCH_2, 1, 2]], MARCH_1)
        assert exc_info.value.timestamp == MARCH_1

    def test_empty_series(self):
        with pytest.raises(DataNotFound):
            find_day_bucket([], MARCH_1)

    def test_string_timestamp_is_not_equal(self):
        with pytest.raises(DataNotFound):
            find_day_bucket([[str(MARCH_1), 1, 2]], MARCH_1)

    @pytest.mark.parametrize("row", [None, [], {"time": MARCH_1}])
    def test_malformed_row_is_not_a_missing_day(self, row):
        """行格式变化说明接口变了，不能当作当天无数据。"""
        with pytest.raises(MalformedResponse) as exc_info:
            find_day_bucket([row, [MARCH_1, 5]], MARCH_1, "https://example/ohlc")
        assert exc_info.value.url == "https://example/ohlc"


class TestBucketValue:
    def test_parses_string(self):
        assert bucket_value([MARCH_1, "1.5"], 1) == 1.5

    def test_short_bucket(self):
        with pytest.raises(MalformedResponse):
            bucket_value([MARCH_1, 10, 20, 30], 4)

    def test_non_numeric(self):
        with pytest.raises(MalformedResponse):
            bucket_value([MARCH_1, "abc"], 1)

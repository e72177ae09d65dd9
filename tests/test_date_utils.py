"""
Tests for search date generation and formatting helpers.
"""

from datetime import date

import pytest

from bahn_bestpreis.utils.date_utils import (
    date_key,
    format_de_datetime,
    generate_dates,
    parse_date,
    parse_int,
    request_timestamp,
)


class TestGenerateDates:
    def test_leap_year_rollover(self):
        dates = generate_dates("2024-02-28", 3)

        assert [d.isoformat() for d in dates] == [
            "2024-02-28T08:00:00+01:00",
            "2024-02-29T08:00:00+01:00",
            "2024-03-01T08:00:00+01:00",
        ]

    def test_year_rollover(self):
        dates = generate_dates(date(2023, 12, 30), 4)

        assert [date_key(d) for d in dates] == [
            "2023-12-30", "2023-12-31", "2024-01-01", "2024-01-02",
        ]

    def test_stays_at_eight_across_dst_change(self):
        # Europe/Berlin switches to summer time on 2024-03-31
        dates = generate_dates("2024-03-30", 2)

        assert [d.hour for d in dates] == [8, 8]
        assert dates[0].utcoffset() != dates[1].utcoffset()

    def test_non_positive_count_is_empty(self):
        assert generate_dates("2024-01-01", 0) == []
        assert generate_dates("2024-01-01", -2) == []

    def test_other_timezone(self):
        dates = generate_dates("2024-07-01", 1, tz="UTC")

        assert dates[0].isoformat() == "2024-07-01T08:00:00+00:00"

    def test_invalid_date_raises(self):
        with pytest.raises(ValueError):
            generate_dates("not-a-date", 3)


def test_parse_date_accepts_iso_timestamp():
    assert parse_date("2024-05-01T10:00:00") == date(2024, 5, 1)


def test_request_timestamp_has_no_offset():
    day = generate_dates("2024-05-01", 1)[0]

    assert request_timestamp(day) == "2024-05-01T08:00:00"


class TestFormatDeDatetime:
    def test_naive_timestamp(self):
        assert format_de_datetime("2024-02-28T08:15:00") == "28.02.2024 08:15:00"

    def test_aware_timestamp_converted_to_local(self):
        assert format_de_datetime("2024-02-28T07:15:00+00:00") == "28.02.2024 08:15:00"

    def test_utc_z_suffix(self):
        assert format_de_datetime("2024-07-01T06:15:00Z") == "01.07.2024 08:15:00"

    def test_numeric_value_returned_as_text(self):
        assert format_de_datetime(1709107200000) == "1709107200000"

    def test_unparseable_returned_as_is(self):
        assert format_de_datetime("gestern") == "gestern"

    def test_missing(self):
        assert format_de_datetime(None) == ""


@pytest.mark.parametrize("value,expected", [
    (2, 2),
    ("2", 2),
    (" 3 Umstiege", 3),
    (2.9, 2),
    ("-1", -1),
    ("zwei", None),
    (None, None),
    (True, None),
    ([], None),
])
def test_parse_int(value, expected):
    assert parse_int(value) == expected

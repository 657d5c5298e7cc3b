"""
End time parsing tests
Region is the default fixed UTC+1 (WAT)
"""

from datetime import datetime, timedelta, timezone

import pytest

from giveaway_system.errors import GiveawayError, InvalidTimeFormat, InvalidTimeRange
from giveaway_system.time_parser import format_clock, format_local_time, parse_end_time, to_24_hour

# 10:30 local
NOW = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)


def test_time_already_passed_today_rolls_to_tomorrow():
    end = parse_end_time("9:00AM", NOW)
    assert end == datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)


def test_time_later_today_stays_today():
    end = parse_end_time("11:30PM", NOW)
    assert end == datetime(2026, 10, 17, 22, 30, tzinfo=timezone.utc)


def test_exactly_now_rolls_to_tomorrow():
    end = parse_end_time("10:30AM", NOW)
    assert end == datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


def test_midnight_and_noon():
    assert parse_end_time("12:00AM", NOW) == datetime(2026, 10, 17, 23, 0, tzinfo=timezone.utc)
    assert parse_end_time("12:15PM", NOW) == datetime(2026, 10, 17, 11, 15, tzinfo=timezone.utc)


def test_lowercase_padded_and_whitespace_accepted():
    assert parse_end_time(" 09:05pm ", NOW) == datetime(2026, 10, 17, 20, 5, tzinfo=timezone.utc)


def test_result_is_aware_utc_and_in_the_next_day():
    end = parse_end_time("7:45PM", NOW)
    assert end.tzinfo is not None
    assert end.utcoffset() == timedelta(0)
    assert NOW < end <= NOW + timedelta(days=1)


def test_naive_now_is_treated_as_utc():
    assert parse_end_time("9:00AM", NOW.replace(tzinfo=None)) == parse_end_time("9:00AM", NOW)


@pytest.mark.parametrize("hour,period,expected", [
    (12, "AM", 0),
    (1, "AM", 1),
    (11, "AM", 11),
    (12, "PM", 12),
    (1, "pm", 13),
    (11, "PM", 23),
])
def test_to_24_hour(hour, period, expected):
    assert to_24_hour(hour, period) == expected


@pytest.mark.parametrize("text", ["9:00AM", "12:00AM", "12:59PM", "1:07pm", "11:30PM"])
def test_parsed_time_formats_back_to_same_clock(text):
    assert format_clock(parse_end_time(text, NOW)) == text.upper()


@pytest.mark.parametrize("text", ["9.00AM", "9:00", "900AM", "9:0AM", "9:00 AM", "abc", "", "123:00AM", None])
def test_malformed_time_is_rejected(text):
    with pytest.raises(InvalidTimeFormat):
        parse_end_time(text, NOW)


@pytest.mark.parametrize("text", ["0:30AM", "13:00PM", "9:60AM", "00:00PM"])
def test_out_of_range_time_is_rejected(text):
    with pytest.raises(InvalidTimeRange):
        parse_end_time(text, NOW)


def test_parse_errors_are_value_errors_with_user_messages():
    with pytest.raises(ValueError) as excinfo:
        parse_end_time("noon", NOW)
    assert isinstance(excinfo.value, GiveawayError)
    assert "HH:MMAM" in str(excinfo.value)


def test_format_local_time_uses_region_label():
    assert format_local_time(datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)) == "Oct 18, 2026 09:00 AM WAT"

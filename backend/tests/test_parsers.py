import datetime as dt

import pytest

from exercise_tracker.exceptions import BadInputError
from exercise_tracker.utils.parsers import clean_text, format_date, parse_date, parse_duration, parse_limit


def test_parse_duration_accepts_ints_and_numeric_strings():
    assert parse_duration(30) == 30
    assert parse_duration("30") == 30
    assert parse_duration(" 45 ") == 45
    assert parse_duration(15.0) == 15


@pytest.mark.parametrize("bad", ["abc", "", None, "3.5", 2.5, True, [], "12abc"])
def test_parse_duration_rejects_non_integers(bad):
    with pytest.raises(BadInputError) as exc:
        parse_duration(bad)
    assert exc.value.message == "Invalid duration"


def test_parse_date_formats():
    assert parse_date("2023-01-01") == dt.date(2023, 1, 1)
    assert parse_date("2023-01-01T23:15:00") == dt.date(2023, 1, 1)
    assert parse_date("2023-01-01T10:00:00Z") == dt.date(2023, 1, 1)
    assert parse_date(None) is None
    assert parse_date("  ") is None


@pytest.mark.parametrize("bad", ["not-a-date", "2023-13-01", "2023-02-30", 20230101])
def test_parse_date_rejects_garbage(bad):
    with pytest.raises(BadInputError) as exc:
        parse_date(bad)
    assert exc.value.message == "Invalid date"


def test_parse_limit_is_permissive():
    assert parse_limit("2") == 2
    assert parse_limit(None) is None
    assert parse_limit("abc") is None
    assert parse_limit("0") is None
    assert parse_limit("-3") == 3


def test_format_date_and_clean_text():
    assert format_date(dt.date(2023, 1, 1)) == "Sun Jan 01 2023"
    assert format_date(dt.date(2024, 1, 1)) == "Mon Jan 01 2024"
    assert clean_text("  alice ") == "alice"
    assert clean_text("   ") is None
    assert clean_text(None) is None

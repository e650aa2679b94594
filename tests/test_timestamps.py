from datetime import datetime, timedelta

import pytest

from timewarp.contracts.errors.errors import TimestampParseError
from timewarp.core.timestamps.parser import DEFAULT_FORMAT, parse_timestamp, to_strptime_format


def test_default_format_matches_ctime_style():
    t = parse_timestamp("Fri May 13 03:13:06 2022")
    assert (t.year, t.month, t.day, t.hour, t.minute, t.second) == (2022, 5, 13, 3, 13, 6)
    # resolved in the local zone
    assert t.tzinfo is not None
    assert t == datetime(2022, 5, 13, 3, 13, 6).astimezone()


def test_space_padded_day():
    t = parse_timestamp("Sun May  1 00:00:00 2022")
    assert t.day == 1


def test_surrounding_whitespace_is_ignored():
    assert parse_timestamp("  Fri May 13 03:13:06 2022 \n") == parse_timestamp("Fri May 13 03:13:06 2022")


@pytest.mark.parametrize(
    "fmt, expected",
    [
        (DEFAULT_FORMAT, "%a %b %d %H:%M:%S %Y"),
        ("%F %R", "%Y-%m-%d %H:%M"),
        ("%D %k:%M", "%m/%d/%y %H:%M"),
        ("%T%.3f", "%H:%M:%S.%f"),
        ("%h %e %l%p", "%b %d %I%p"),
        ("100%% at %T", "100%% at %H:%M:%S"),
        ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S%z"),
    ],
)
def test_shorthand_directives_expand(fmt, expected):
    assert to_strptime_format(fmt) == expected


def test_explicit_offset_is_kept():
    t = parse_timestamp("2022-05-13T03:13:06+0200", "%Y-%m-%dT%H:%M:%S%z")
    assert t.utcoffset() == timedelta(hours=2)


def test_fractional_seconds():
    t = parse_timestamp("2022-05-13 03:13:06.250", "%F %T%.3f")
    assert t.microsecond == 250_000


def test_mismatch_reports_text_and_format():
    with pytest.raises(TimestampParseError) as exc:
        parse_timestamp("yesterday-ish")
    assert exc.value.text == "yesterday-ish"
    assert exc.value.format == DEFAULT_FORMAT
    assert "yesterday-ish" in str(exc.value)


def test_no_format_detection():
    with pytest.raises(TimestampParseError):
        parse_timestamp("2022-05-13 03:13:06")

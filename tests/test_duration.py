from datetime import datetime, timedelta, timezone

import pytest

from timewarp.contracts.errors.errors import ArithmeticOverflow
from timewarp.core.duration.duration import MAX_NANOS, MIN_NANOS, Duration
from timewarp.core.duration.units import NANOS_PER_DAY, NANOS_PER_HOUR, TimeUnit

UTC = timezone.utc


def test_zero_duration_returns_the_same_instant():
    t = datetime(2022, 5, 13, 3, 13, 6, tzinfo=UTC)
    assert Duration().apply(t) == t
    assert Duration().is_zero


def test_fixed_part_is_elapsed_time():
    t = datetime(2022, 5, 13, 3, 13, 6, tzinfo=UTC)
    assert Duration(nanoseconds=NANOS_PER_DAY).apply(t) == datetime(2022, 5, 14, 3, 13, 6, tzinfo=UTC)
    assert Duration(nanoseconds=-2 * NANOS_PER_HOUR).apply(t) == datetime(2022, 5, 13, 1, 13, 6, tzinfo=UTC)


def test_fixed_part_keeps_the_original_zone():
    plus2 = timezone(timedelta(hours=2))
    t = datetime(2022, 5, 13, 3, 0, tzinfo=plus2)
    shifted = Duration(nanoseconds=NANOS_PER_HOUR).apply(t)
    assert shifted.tzinfo == plus2
    assert shifted.hour == 4


def test_naive_instants_are_shifted_too():
    t = datetime(2022, 5, 13, 3, 13, 6)
    assert Duration(nanoseconds=NANOS_PER_DAY).apply(t) == datetime(2022, 5, 14, 3, 13, 6)


def test_months_clamp_to_end_of_month():
    assert Duration(months=1).apply(datetime(2022, 1, 31, tzinfo=UTC)) == datetime(2022, 2, 28, tzinfo=UTC)
    assert Duration(months=1).apply(datetime(2024, 1, 31, tzinfo=UTC)) == datetime(2024, 2, 29, tzinfo=UTC)
    assert Duration(months=-1).apply(datetime(2022, 3, 31, tzinfo=UTC)) == datetime(2022, 2, 28, tzinfo=UTC)


def test_years_on_leap_day():
    assert Duration(years=1).apply(datetime(2024, 2, 29, 12, tzinfo=UTC)) == datetime(2025, 2, 28, 12, tzinfo=UTC)


def test_calendar_part_is_applied_before_elapsed_part():
    d = Duration(nanoseconds=NANOS_PER_DAY, months=1)
    # Jan 31 + 1 month = Feb 28, then + 1 day = Mar 1
    assert d.apply(datetime(2022, 1, 31, tzinfo=UTC)) == datetime(2022, 3, 1, tzinfo=UTC)


def test_elapsed_truncates_sub_microseconds_toward_zero():
    assert Duration(nanoseconds=1_999).elapsed == timedelta(microseconds=1)
    assert Duration(nanoseconds=-1_999).elapsed == timedelta(microseconds=-1)
    assert Duration(nanoseconds=999).elapsed == timedelta(0)


def test_add_and_negate():
    a = Duration(nanoseconds=5, months=1)
    b = Duration(nanoseconds=-2, years=2)
    assert a + b == Duration(nanoseconds=3, months=1, years=2)
    assert -a == Duration(nanoseconds=-5, months=-1)


def test_of_routes_calendar_units():
    assert Duration.of(3, TimeUnit.months) == Duration(months=3)
    assert Duration.of(2, TimeUnit.years) == Duration(years=2)
    assert Duration.of(2, TimeUnit.days) == Duration(nanoseconds=2 * NANOS_PER_DAY)


def test_nanoseconds_are_bounded_to_64_bits():
    Duration(nanoseconds=MAX_NANOS)
    Duration(nanoseconds=MIN_NANOS)
    with pytest.raises(ArithmeticOverflow):
        Duration(nanoseconds=MAX_NANOS + 1)
    with pytest.raises(ArithmeticOverflow):
        Duration(nanoseconds=MAX_NANOS) + Duration(nanoseconds=1)
    with pytest.raises(ArithmeticOverflow):
        -Duration(nanoseconds=MIN_NANOS)


def test_applying_past_the_datetime_range_overflows():
    late = datetime(9999, 12, 31, tzinfo=UTC)
    with pytest.raises(ArithmeticOverflow):
        Duration(nanoseconds=2 * NANOS_PER_DAY).apply(late)
    with pytest.raises(ArithmeticOverflow):
        Duration(years=10).apply(datetime(9995, 1, 1, tzinfo=UTC))


def test_calendar_units_have_no_fixed_length():
    assert TimeUnit.months.is_calendar
    assert not TimeUnit.weeks.is_calendar
    with pytest.raises(ValueError):
        TimeUnit.years.nanos

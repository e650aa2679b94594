from __future__ import annotations

from enum import Enum

NANOS_PER_MICRO = 1_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR
NANOS_PER_WEEK = 7 * NANOS_PER_DAY


class TimeUnit(str, Enum):
    nanoseconds = "nanoseconds"
    microseconds = "microseconds"
    milliseconds = "milliseconds"
    seconds = "seconds"
    minutes = "minutes"
    hours = "hours"
    days = "days"
    weeks = "weeks"
    months = "months"
    years = "years"

    @property
    def is_calendar(self) -> bool:
        """Months and years have no fixed length; they are applied on the calendar."""
        return self in (TimeUnit.months, TimeUnit.years)

    @property
    def nanos(self) -> int:
        if self.is_calendar:
            raise ValueError(f"{self.value} has no fixed length")
        return _FIXED_NANOS[self]

    @property
    def abbreviation(self) -> str:
        return _ABBREVIATIONS[self]


_FIXED_NANOS: dict[TimeUnit, int] = {
    TimeUnit.nanoseconds: 1,
    TimeUnit.microseconds: NANOS_PER_MICRO,
    TimeUnit.milliseconds: NANOS_PER_MILLI,
    TimeUnit.seconds: NANOS_PER_SECOND,
    TimeUnit.minutes: NANOS_PER_MINUTE,
    TimeUnit.hours: NANOS_PER_HOUR,
    TimeUnit.days: NANOS_PER_DAY,
    TimeUnit.weeks: NANOS_PER_WEEK,
}

# Canonical short form, also used when rendering a Duration back to text.
_ABBREVIATIONS: dict[TimeUnit, str] = {
    TimeUnit.nanoseconds: "ns",
    TimeUnit.microseconds: "us",
    TimeUnit.milliseconds: "ms",
    TimeUnit.seconds: "s",
    TimeUnit.minutes: "m",
    TimeUnit.hours: "h",
    TimeUnit.days: "d",
    TimeUnit.weeks: "w",
    TimeUnit.months: "mo",
    TimeUnit.years: "y",
}

# Every accepted spelling, already casefolded. Bare "m" is minutes; months need "mo".
UNIT_ALIASES: dict[str, TimeUnit] = {
    # nanoseconds
    "ns": TimeUnit.nanoseconds,
    "nsec": TimeUnit.nanoseconds,
    "nsecs": TimeUnit.nanoseconds,
    "nanosecond": TimeUnit.nanoseconds,
    "nanoseconds": TimeUnit.nanoseconds,
    # microseconds ("µ" casefolds to greek mu)
    "us": TimeUnit.microseconds,
    "μs": TimeUnit.microseconds,
    "usec": TimeUnit.microseconds,
    "usecs": TimeUnit.microseconds,
    "microsecond": TimeUnit.microseconds,
    "microseconds": TimeUnit.microseconds,
    # milliseconds
    "ms": TimeUnit.milliseconds,
    "msec": TimeUnit.milliseconds,
    "msecs": TimeUnit.milliseconds,
    "millisecond": TimeUnit.milliseconds,
    "milliseconds": TimeUnit.milliseconds,
    # seconds
    "s": TimeUnit.seconds,
    "sec": TimeUnit.seconds,
    "secs": TimeUnit.seconds,
    "second": TimeUnit.seconds,
    "seconds": TimeUnit.seconds,
    # minutes
    "m": TimeUnit.minutes,
    "min": TimeUnit.minutes,
    "mins": TimeUnit.minutes,
    "minute": TimeUnit.minutes,
    "minutes": TimeUnit.minutes,
    # hours
    "h": TimeUnit.hours,
    "hr": TimeUnit.hours,
    "hrs": TimeUnit.hours,
    "hour": TimeUnit.hours,
    "hours": TimeUnit.hours,
    # days
    "d": TimeUnit.days,
    "day": TimeUnit.days,
    "days": TimeUnit.days,
    # weeks
    "w": TimeUnit.weeks,
    "wk": TimeUnit.weeks,
    "wks": TimeUnit.weeks,
    "week": TimeUnit.weeks,
    "weeks": TimeUnit.weeks,
    # months
    "mo": TimeUnit.months,
    "mon": TimeUnit.months,
    "mos": TimeUnit.months,
    "month": TimeUnit.months,
    "months": TimeUnit.months,
    # years
    "y": TimeUnit.years,
    "yr": TimeUnit.years,
    "yrs": TimeUnit.years,
    "year": TimeUnit.years,
    "years": TimeUnit.years,
}


def lookup_unit(word: str) -> TimeUnit | None:
    """Case-insensitive lookup of a unit word; None when it is not a known unit."""
    return UNIT_ALIASES.get(word.casefold())

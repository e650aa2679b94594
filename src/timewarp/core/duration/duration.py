from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta

from timewarp.contracts.errors.errors import ArithmeticOverflow

from .units import NANOS_PER_MICRO, TimeUnit

# Fixed-length part is held as a signed 64-bit nanosecond count.
MAX_NANOS = 2**63 - 1
MIN_NANOS = -(2**63)


def checked_nanos(value: int) -> int:
    if value > MAX_NANOS or value < MIN_NANOS:
        raise ArithmeticOverflow(f"duration of {value} ns does not fit in a signed 64-bit count")
    return value


@dataclass(frozen=True)
class Duration:
    """
    Signed offset built from an expression such as "1 mo 15 days 20 s".

    - nanoseconds: fixed-length part (ns..weeks), added as elapsed time.
    - months / years: calendar part, applied to the wall clock of the instant.

    apply() uses the calendar part first (day of month is clamped to the end of
    the target month, so Jan 31 + 1 mo lands on the last day of February) and
    then adds the fixed part.
    """

    nanoseconds: int = 0
    months: int = 0
    years: int = 0

    def __post_init__(self) -> None:
        checked_nanos(self.nanoseconds)

    @classmethod
    def of(cls, amount: int, unit: TimeUnit) -> Duration:
        if unit is TimeUnit.months:
            return cls(months=amount)
        if unit is TimeUnit.years:
            return cls(years=amount)
        return cls(nanoseconds=checked_nanos(amount * unit.nanos))

    @property
    def is_zero(self) -> bool:
        return self.nanoseconds == 0 and self.months == 0 and self.years == 0

    @property
    def has_calendar_part(self) -> bool:
        return self.months != 0 or self.years != 0

    @property
    def elapsed(self) -> timedelta:
        """Fixed-length part as a timedelta; sub-microsecond remainder truncated toward zero."""
        micros = abs(self.nanoseconds) // NANOS_PER_MICRO
        return timedelta(microseconds=micros if self.nanoseconds >= 0 else -micros)

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(
            nanoseconds=checked_nanos(self.nanoseconds + other.nanoseconds),
            months=self.months + other.months,
            years=self.years + other.years,
        )

    def __neg__(self) -> Duration:
        return Duration(
            nanoseconds=checked_nanos(-self.nanoseconds),
            months=-self.months,
            years=-self.years,
        )

    def apply(self, instant: datetime) -> datetime:
        """Return `instant` shifted by this duration."""
        if self.is_zero:
            return instant
        try:
            shifted = instant
            if self.has_calendar_part:
                shifted = shifted + relativedelta(years=self.years, months=self.months)
            if self.nanoseconds:
                if shifted.tzinfo is None:
                    return shifted + self.elapsed
                # elapsed time is added on the UTC timeline, then shown in the original zone
                moved = shifted.astimezone(timezone.utc) + self.elapsed
                return moved.astimezone(shifted.tzinfo)
            return shifted
        except (OverflowError, OSError, ValueError) as e:
            raise ArithmeticOverflow(f"applying offset to {instant.isoformat()} is out of range: {e}") from e

    def __str__(self) -> str:
        return format_duration(self)


_NANOS_ORDER = (
    TimeUnit.weeks,
    TimeUnit.days,
    TimeUnit.hours,
    TimeUnit.minutes,
    TimeUnit.seconds,
    TimeUnit.milliseconds,
    TimeUnit.microseconds,
    TimeUnit.nanoseconds,
)


def format_duration(d: Duration) -> str:
    """
    Render a Duration as a compact expression, e.g. "1y 2mo 3d 4h 5m 6s 7ms".

    The output is accepted by parse_duration and parses back to an equal Duration.
    Each component keeps its own sign.
    """
    parts: list[str] = []
    if d.years:
        parts.append(f"{d.years}{TimeUnit.years.abbreviation}")
    if d.months:
        parts.append(f"{d.months}{TimeUnit.months.abbreviation}")

    sign = "-" if d.nanoseconds < 0 else ""
    remaining = abs(d.nanoseconds)
    for unit in _NANOS_ORDER:
        count, remaining = divmod(remaining, unit.nanos)
        if count:
            parts.append(f"{sign}{count}{unit.abbreviation}")

    return " ".join(parts) or "0s"

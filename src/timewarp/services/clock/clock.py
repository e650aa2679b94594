from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from dateutil import tz


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in the local system time zone."""

    def now(self) -> datetime:
        return datetime.now(tz.tzlocal())


@dataclass(frozen=True)
class FixedClock:
    """Always returns the same instant (tests, reproducible runs)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant

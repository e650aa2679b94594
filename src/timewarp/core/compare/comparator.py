from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
import operator
from typing import Callable


class CompareOp(str, Enum):
    gt = "gt"
    lt = "lt"
    eq = "eq"
    ge = "ge"
    le = "le"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def description(self) -> str:
        return f"Comparing Sample Time {self.symbol} Reference + Offset"


_OPERATORS: dict[CompareOp, Callable[[datetime, datetime], bool]] = {
    CompareOp.gt: operator.gt,
    CompareOp.lt: operator.lt,
    CompareOp.eq: operator.eq,
    CompareOp.ge: operator.ge,
    CompareOp.le: operator.le,
}

_SYMBOLS: dict[CompareOp, str] = {
    CompareOp.gt: ">",
    CompareOp.lt: "<",
    CompareOp.eq: "=",
    CompareOp.ge: ">=",
    CompareOp.le: "<=",
}


def _utc(t: datetime) -> datetime:
    # aware datetimes sharing a tzinfo compare by wall clock; UTC makes it the instant
    return t.astimezone(timezone.utc) if t.tzinfo is not None else t


def compare(sample: datetime, reference: datetime, op: CompareOp) -> bool:
    """True when `sample <op> reference` holds; instants are compared exactly."""
    return bool(_OPERATORS[CompareOp(op)](_utc(sample), _utc(reference)))

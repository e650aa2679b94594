from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
import logging
import re

from timewarp.contracts.errors.errors import InvalidDurationSyntax, UnknownUnit

from .duration import Duration, checked_nanos, format_duration
from .units import TimeUnit, lookup_unit

__all__ = ["UnitToken", "tokenize", "parse_duration", "format_duration"]

log = logging.getLogger(__name__)

"""
Offset expression grammar

    expr      := token ( [","] token )*
    token     := magnitude ws* unit
    magnitude := [+-]? ( digits [ "." digits ] | "." digits )
    unit      := letters            (looked up case-insensitively, see units.UNIT_ALIASES)

Whitespace between tokens is optional, so "15 days 20 seconds", "15d20s" and
"1h, 30m" all tokenize. Anything that is not part of a token is a syntax error.
"""

_TOKEN_RE = re.compile(
    r"""
    (?P<magnitude>[+-]?(?:\d+(?:\.\d+)?|\.\d+))
    \s*
    (?P<unit>[^\W\d_]+)?
    """,
    re.VERBOSE,
)
_SEPARATOR_RE = re.compile(r"[\s,]*")


@dataclass(frozen=True)
class UnitToken:
    magnitude: Decimal
    unit: TimeUnit

    def to_duration(self, expr: str) -> Duration:
        if self.unit.is_calendar:
            if self.magnitude != self.magnitude.to_integral_value():
                raise InvalidDurationSyntax(expr, f"{self.unit.value} need a whole number, got {self.magnitude}")
            return Duration.of(int(self.magnitude), self.unit)

        nanos = (self.magnitude * self.unit.nanos).to_integral_value(rounding=ROUND_HALF_EVEN)
        return Duration(nanoseconds=checked_nanos(int(nanos)))


def tokenize(expr: str) -> list[UnitToken]:
    """
    Split an offset expression into (magnitude, unit) tokens.

    Raises InvalidDurationSyntax for blank input, a magnitude without unit or
    stray characters; UnknownUnit for an unrecognized unit word.
    """
    tokens: list[UnitToken] = []
    pos = _SEPARATOR_RE.match(expr).end()

    while pos < len(expr):
        m = _TOKEN_RE.match(expr, pos)
        if m is None:
            raise InvalidDurationSyntax(expr, f"unexpected {expr[pos:]!r} at position {pos}")

        word = m.group("unit")
        if word is None:
            raise InvalidDurationSyntax(expr, f"missing unit after {m.group('magnitude')!r}")

        unit = lookup_unit(word)
        if unit is None:
            raise UnknownUnit(word, expr)

        tokens.append(UnitToken(magnitude=Decimal(m.group("magnitude")), unit=unit))
        pos = _SEPARATOR_RE.match(expr, m.end()).end()

    if not tokens:
        raise InvalidDurationSyntax(expr)
    return tokens


def parse_duration(expr: str) -> Duration:
    """
    Parse a free-form offset such as "15 days 20 seconds 100 milliseconds" or "-1h30m".

    Fixed-length units are summed into one nanosecond count; months and years
    are summed into their own counters and applied on the calendar later.
    """
    total = Duration()
    for token in tokenize(expr):
        total = total + token.to_duration(expr)

    log.debug("parsed offset %r as %s", expr, format_duration(total))
    return total

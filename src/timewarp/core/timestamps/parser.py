from __future__ import annotations

from datetime import datetime, timezone
import logging
import re

from dateutil import tz

from timewarp.contracts.errors.errors import TimestampParseError

log = logging.getLogger(__name__)

# e.g. "Fri May 13 03:13:06 2022"
DEFAULT_FORMAT = "%a %b %e %T %Y"

# Shorthand directives that datetime.strptime does not understand.
_SHORTHANDS: dict[str, str] = {
    "T": "%H:%M:%S",
    "R": "%H:%M",
    "D": "%m/%d/%y",
    "F": "%Y-%m-%d",
    "e": "%d",  # strptime's %d already accepts a space-padded day
    "k": "%H",
    "l": "%I",
    "h": "%b",
    ".f": ".%f",
    ".3f": ".%f",
    ".6f": ".%f",
    ".9f": ".%f",
}

_DIRECTIVE_RE = re.compile(r"%(%|\.\d?f|[A-Za-z])")


def to_strptime_format(fmt: str) -> str:
    """Expand shorthand directives (%T, %e, %F, ...) into plain strptime ones."""

    def _expand(m: re.Match[str]) -> str:
        return _SHORTHANDS.get(m.group(1), m.group(0))

    return _DIRECTIVE_RE.sub(_expand, fmt)


def parse_timestamp(text: str, fmt: str = DEFAULT_FORMAT) -> datetime:
    """
    Parse `text` with `fmt` into an aware datetime.

    Naive results are resolved in the local system time zone (dateutil tzlocal,
    so calendar arithmetic later follows DST); a format with %z keeps the parsed
    offset. No format detection is attempted.
    """
    pattern = to_strptime_format(fmt)
    try:
        parsed = datetime.strptime(text.strip(), pattern)
    except ValueError as e:
        raise TimestampParseError(text, fmt, str(e)) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.tzlocal())
    try:
        parsed.astimezone(timezone.utc)
    except (OverflowError, OSError) as e:
        raise TimestampParseError(text, fmt, f"cannot resolve local time: {e}") from e
    log.debug("parsed %r as %s", text, parsed.isoformat())
    return parsed

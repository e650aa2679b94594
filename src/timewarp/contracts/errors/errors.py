from __future__ import annotations


class TimewarpError(Exception):
    """Base class for every failure the CLI reports to the user."""

    exit_code: int = 1


# --- Duration expressions ---


class DurationError(TimewarpError):
    """Raised when an offset expression cannot be turned into a Duration."""


class InvalidDurationSyntax(DurationError):
    def __init__(self, expr: str, reason: str = "no duration found"):
        self.expr = expr
        self.reason = reason
        super().__init__(f"invalid duration {expr!r}: {reason}")


class UnknownUnit(DurationError):
    def __init__(self, unit: str, expr: str):
        self.unit = unit
        self.expr = expr
        super().__init__(f"unknown time unit {unit!r} in duration {expr!r}")


class ArithmeticOverflow(TimewarpError):
    """Accumulated or applied duration left the representable range."""


# --- Timestamps ---


class TimestampParseError(TimewarpError):
    def __init__(self, text: str, format: str, detail: str | None = None):
        self.text = text
        self.format = format
        self.detail = detail
        msg = f"cannot parse timestamp {text!r} with format {format!r}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


# --- Input sources / CLI ---


class InputSourceError(TimewarpError):
    """Problems opening or reading the sample input."""


class FileNotReadable(InputSourceError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path!r}: {reason}")


class MissingRequiredArgument(TimewarpError):
    exit_code = 2

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"the following argument is required: {argument}")

__version__ = "0.1.0"

# Offsets
from .core.duration.duration import Duration  # signed fixed + calendar offset
from .core.duration.parser import parse_duration, format_duration

# Timestamps
from .core.timestamps.parser import DEFAULT_FORMAT, parse_timestamp

# Comparison
from .core.compare.comparator import CompareOp, compare

# Errors
from .contracts.errors.errors import (
    TimewarpError,
    InvalidDurationSyntax,
    UnknownUnit,
    ArithmeticOverflow,
    TimestampParseError,
    FileNotReadable,
    MissingRequiredArgument,
)

__all__ = [
    # Offsets
    "Duration", "parse_duration", "format_duration",
    # Timestamps
    "DEFAULT_FORMAT", "parse_timestamp",
    # Comparison
    "CompareOp", "compare",
    # Errors
    "TimewarpError", "InvalidDurationSyntax", "UnknownUnit", "ArithmeticOverflow",
    "TimestampParseError", "FileNotReadable", "MissingRequiredArgument",
]

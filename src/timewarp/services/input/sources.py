from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import os
from pathlib import Path
import sys
from typing import Iterable, Iterator, TextIO

from timewarp.contracts.errors.errors import FileNotReadable

log = logging.getLogger(__name__)


class SourceKind(str, Enum):
    literal = "literal"
    file = "file"
    stdin = "stdin"


@dataclass(frozen=True)
class InputSource:
    """
    Where sample timestamps come from.

    - literal: `value` is the single sample.
    - file: `value` is a path; lines are read lazily, each iteration reopens it.
    - stdin: lines of `stream` (sys.stdin by default) until end of stream.

    lines() strips the trailing newline; file and stdin sources skip blank lines.
    """

    kind: SourceKind
    value: str | None = None
    stream: TextIO | None = None

    @property
    def label(self) -> str:
        if self.kind is SourceKind.file:
            return str(self.value)
        return f"<{self.kind.value}>"

    def lines(self) -> Iterator[str]:
        for _, line in self.numbered_lines():
            yield line

    def numbered_lines(self) -> Iterator[tuple[int, str]]:
        """Like lines(), paired with the 1-based physical line number."""
        if self.kind is SourceKind.literal:
            # a literal is always one sample, even when blank
            yield 1, self.value or ""
        elif self.kind is SourceKind.file:
            try:
                f = open(self.value, encoding="utf-8")  # noqa: SIM115
            except OSError as e:
                raise FileNotReadable(str(self.value), e.strerror or str(e)) from e
            with f:
                try:
                    yield from _non_blank(f)
                except (OSError, UnicodeDecodeError) as e:
                    raise FileNotReadable(str(self.value), str(e)) from e
        else:
            try:
                yield from _non_blank(self.stream if self.stream is not None else sys.stdin)
            except (OSError, UnicodeDecodeError) as e:
                raise FileNotReadable(self.label, str(e)) from e


def _non_blank(raw: Iterable[str]) -> Iterator[tuple[int, str]]:
    for lineno, line in enumerate(raw, start=1):
        line = line.rstrip("\r\n")
        if line.strip():
            yield lineno, line


def _path_exists(p: Path) -> bool:
    # long literal timestamps can trip ENAMETOOLONG
    try:
        return p.exists()
    except (OSError, ValueError):
        return False


def resolve_source(arg: str | None, *, stdin: TextIO | None = None) -> InputSource:
    """
    Decide what the --comp-timeorfile argument refers to.

    None -> stdin; an existing path -> file (must be a readable regular file);
    anything else -> a literal timestamp.
    """
    if arg is None:
        log.debug("reading samples from stdin")
        return InputSource(kind=SourceKind.stdin, stream=stdin)

    p = Path(arg)
    if _path_exists(p):
        if not p.is_file():
            raise FileNotReadable(arg, "not a regular file")
        if not os.access(p, os.R_OK):
            raise FileNotReadable(arg, "permission denied")
        log.debug("reading samples from file %s", p)
        return InputSource(kind=SourceKind.file, value=arg)

    return InputSource(kind=SourceKind.literal, value=arg)

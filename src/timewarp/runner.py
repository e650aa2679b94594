# timewarp/runner.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
import sys
from typing import TextIO

from timewarp.config.settings import TimewarpSettings
from timewarp.contracts.errors.errors import TimestampParseError
from timewarp.core.compare.comparator import CompareOp, compare
from timewarp.core.duration.parser import format_duration, parse_duration
from timewarp.core.timestamps.parser import parse_timestamp
from timewarp.services.clock.clock import Clock, SystemClock
from timewarp.services.input.sources import InputSource, resolve_source
from timewarp.services.logger.base import LoggerService

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Invocation:
    """What to compare: mirrors the CLI flags one to one."""

    offset: str
    op: CompareOp
    ref_time: str | None = None  # None -> now, from the clock
    comp_timeorfile: str | None = None  # None -> stdin


@dataclass
class RunReport:
    compared: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def adjusted_reference(inv: Invocation, settings: TimewarpSettings, clock: Clock | None = None) -> datetime:
    """Reference time plus offset; computed once per invocation."""
    offset = parse_duration(inv.offset)
    if inv.ref_time is None:
        reference = (clock or SystemClock()).now()
    else:
        reference = parse_timestamp(inv.ref_time, settings.format)

    adjusted = offset.apply(reference)
    log.info(
        "reference %s + %s = %s",
        reference.isoformat(),
        format_duration(offset),
        adjusted.isoformat(),
    )
    return adjusted


def compare_source(
    source: InputSource,
    reference: datetime,
    op: CompareOp,
    settings: TimewarpSettings,
    *,
    out: TextIO | None = None,
    err: TextIO | None = None,
    logger_service: LoggerService | None = None,
) -> RunReport:
    """
    Parse and compare every sample of `source` against `reference`, printing
    "true"/"false" per sample as soon as it is known.

    With settings.fail_fast the first TimestampParseError propagates; otherwise
    the line is reported on `err`, recorded in the report and skipped.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    report = RunReport()

    for lineno, raw in source.numbered_lines():
        try:
            sample = parse_timestamp(raw, settings.format)
        except TimestampParseError as e:
            if settings.fail_fast:
                raise
            msg = f"line {lineno}: {e}"
            report.failures.append(msg)
            print(f"timewarp: error: {msg}", file=err)
            continue

        result = compare(sample, reference, op)
        report.compared += 1
        print("true" if result else "false", file=out, flush=True)

        if logger_service is not None:
            logger_service.for_source_ctx(source=source.label, line=lineno).debug(
                "%s %s %s -> %s", sample.isoformat(), op.symbol, reference.isoformat(), result
            )

    return report


def run(
    inv: Invocation,
    settings: TimewarpSettings | None = None,
    *,
    clock: Clock | None = None,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
    logger_service: LoggerService | None = None,
) -> RunReport:
    """Full pipeline: offset and reference once, then one comparison per sample."""
    settings = settings or TimewarpSettings()
    reference = adjusted_reference(inv, settings, clock)
    source = resolve_source(inv.comp_timeorfile, stdin=stdin)
    report = compare_source(
        source,
        reference,
        inv.op,
        settings,
        out=out,
        err=err,
        logger_service=logger_service,
    )
    log.info("compared %d sample(s) from %s, %d failed", report.compared, source.label, len(report.failures))
    return report

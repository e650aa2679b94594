# timewarp/__main__.py
from __future__ import annotations

import argparse
import os
import sys

from pydantic import ValidationError

from timewarp import __version__
from timewarp.config.loader import settings_from_args
from timewarp.contracts.errors.errors import MissingRequiredArgument, TimewarpError
from timewarp.core.compare.comparator import CompareOp
from timewarp.core.timestamps.parser import DEFAULT_FORMAT
from timewarp.runner import Invocation, run
from timewarp.services.logger.std import LoggingConfig, StdLoggerService

"""
timewarp CLI

Compares sample timestamps against a reference time shifted by an offset and
prints one `true`/`false` per sample.

  Single sample:
    timewarp -r "Fri May 13 03:13:06 2022" -o "1 days" -c "Sat May 14 03:13:06 2022" eq

  File of samples (one per line):
    timewarp -r "Fri May 13 03:13:06 2022" -o "15 days 20 seconds 100 milliseconds" -c dates.txt gt

  Samples on stdin, reference = now:
    last -F | cut -c40-63 | timewarp -o "-1 week" ge

Exit status: 0 on success, 1 when an offset, timestamp or file cannot be
read, 2 on usage errors. Results printed before a failure stay printed.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timewarp",
        description="Time Differ CLI: compare sample times against reference time + offset.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument(
        "-r",
        "--ref-time",
        default=None,
        help="Reference time; the offset is added to it. Defaults to the current local time.",
    )
    parser.add_argument(
        "-o",
        "--offset",
        default=None,
        help=(
            "Offset added to the reference time, built from "
            "<nanoseconds microseconds milliseconds seconds minutes hours days weeks months years>, "
            'e.g. "15 days 20 seconds 100 milliseconds" or "-2 hours". '
            'Compact negative offsets need the = form: --offset=-1h. '
            '"m" is minutes, "mo" is months. (required)'
        ),
    )
    parser.add_argument(
        "-c",
        "--comp-timeorfile",
        default=None,
        help="Sample time, or a file with one sample per line. Reads stdin when omitted.",
    )
    parser.add_argument(
        "-f",
        "--format",
        default=None,
        help=f'strptime format for all times (default: "{DEFAULT_FORMAT.replace("%", "%%")}").',
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Report unparsable sample lines and continue instead of stopping (exit status is still 1).",
    )
    parser.add_argument("--log-level", default=None, help="Diagnostics level on stderr (default: warning).")
    parser.add_argument("--no-color", action="store_true", help="Disable colored diagnostics.")

    sub = parser.add_subparsers(dest="op", metavar="{" + ",".join(op.value for op in CompareOp) + "}")
    for op in CompareOp:
        sub.add_parser(op.value, help=op.description)

    return parser


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.offset is None:
            raise MissingRequiredArgument("-o/--offset")
        if args.op is None:
            raise MissingRequiredArgument("comparison {" + ",".join(op.value for op in CompareOp) + "}")
        settings = settings_from_args(args)
    except MissingRequiredArgument as e:
        parser.print_usage(sys.stderr)
        print(f"timewarp: error: {e}", file=sys.stderr)
        return e.exit_code
    except ValidationError as e:
        parser.print_usage(sys.stderr)
        for problem in e.errors():
            loc = ".".join(str(p) for p in problem["loc"])
            print(f"timewarp: error: {loc}: {problem['msg']}", file=sys.stderr)
        return 2

    logger_service = StdLoggerService.build(LoggingConfig.from_settings(settings.logging), stream=sys.stderr)

    inv = Invocation(
        offset=args.offset,
        op=CompareOp(args.op),
        ref_time=args.ref_time,
        comp_timeorfile=args.comp_timeorfile,
    )
    try:
        report = run(inv, settings, logger_service=logger_service)
    except TimewarpError as e:
        logger_service.for_runner().debug("aborted", exc_info=True)
        print(f"timewarp: error: {e}", file=sys.stderr)
        return e.exit_code
    except BrokenPipeError:
        # reader went away (e.g. `| head -1`); stop quietly
        _silence_stdout()
        return 1

    return 0 if report.ok else 1


def _silence_stdout() -> None:
    # the interpreter flushes stdout at exit; point it at devnull so that flush cannot fail again
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError, AttributeError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


if __name__ == "__main__":
    raise SystemExit(main())

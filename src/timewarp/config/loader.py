# timewarp/config/loader.py
from __future__ import annotations

import argparse
import logging

from .settings import LoggingSettings, TimewarpSettings


def settings_from_args(args: argparse.Namespace) -> TimewarpSettings:
    """
    Build settings from parsed CLI arguments.

    Only flags that were actually given override the defaults; there are no env
    files or environment variables involved.
    """
    overrides: dict = {}
    if getattr(args, "format", None) is not None:
        overrides["format"] = args.format
    if getattr(args, "keep_going", False):
        overrides["fail_fast"] = False

    log_overrides: dict = {}
    if getattr(args, "log_level", None) is not None:
        log_overrides["level"] = args.log_level
    if getattr(args, "no_color", False):
        log_overrides["use_color"] = False

    settings = TimewarpSettings(logging=LoggingSettings(**log_overrides), **overrides)
    logging.getLogger("timewarp.config.loader").debug("settings: %s", settings.model_dump())
    return settings

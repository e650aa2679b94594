from __future__ import annotations
from dataclasses import dataclass, field
import logging
import sys

from typing import Optional, Mapping, TextIO

from timewarp.config.settings import LoggingSettings

from .base import LoggerService, LogContext
from .formatters import SafeFormatter, ColorFormatter


@dataclass(frozen=True)
class LoggingConfig:
    """
    Configure the stderr sink.

    Attributes:
      root_ns: base logger name to use (`timewarp`).
      level: default level for the root logger.
      use_color: ANSI level colors when the stream is a terminal.
      per_namespace_levels: optional map (e.g. {"timewarp.core": "DEBUG"}).
      console_pattern: text format string for the console.
    """
    root_ns: str = "timewarp"
    level: str = "WARNING"
    use_color: bool = True
    per_namespace_levels: Mapping[str, str] = field(default_factory=dict)
    console_pattern: str = "%(asctime)s %(levelname)s %(name)s source=%(source)s line=%(line)s - %(message)s"

    @staticmethod
    def from_settings(cfg: LoggingSettings) -> "LoggingConfig":
        return LoggingConfig(
            root_ns="timewarp",
            level=cfg.level,
            use_color=cfg.use_color,
            per_namespace_levels=dict(cfg.per_namespace_levels),
        )


class _ContextAdapter(logging.LoggerAdapter):
    """
    Injects contextual fields into LogRecord via `extra`.
    Preserves original logger API (info, debug, etc.).
    """
    def process(self, msg, kwargs):
        extra = kwargs.get("extra") or {}
        merged = {**self.extra, **extra}
        kwargs["extra"] = merged
        return msg, kwargs


class StdLoggerService(LoggerService):
    """
      • text formatter, colored on a tty
      • per-namespace levels
      • context helpers (with_context / for_source_ctx)
    """
    def __init__(self, base: logging.Logger, *, cfg: LoggingConfig):
        self._base = base
        self._cfg = cfg

    # --- LoggerService interface ---

    def base(self) -> logging.Logger:
        return self._base

    def for_namespace(self, ns: str) -> logging.Logger:
        return self._base.getChild(ns)

    def with_context(self, logger: logging.Logger, ctx: LogContext) -> logging.Logger:
        return _ContextAdapter(logger, ctx.as_extra())

    def for_runner(self) -> logging.Logger:
        return self.for_namespace("runner")

    def for_source_ctx(self, *, source: str, line: Optional[int] = None) -> logging.Logger:
        return self.with_context(self.for_runner(), LogContext(source=source, line=line))

    # --- builder ---

    @staticmethod
    def build(cfg: Optional[LoggingConfig] = None, *, stream: Optional[TextIO] = None) -> "StdLoggerService":
        cfg = cfg or LoggingConfig()
        stream = stream if stream is not None else sys.stderr

        root = logging.getLogger(cfg.root_ns)
        # Reset handlers if rebuilding (main() may run several times in one process)
        for h in list(root.handlers):
            root.removeHandler(h)
        root.setLevel(getattr(logging, cfg.level.upper(), logging.WARNING))
        root.propagate = False

        # Per-namespace levels
        if cfg.per_namespace_levels:
            for ns, lvl in cfg.per_namespace_levels.items():
                logging.getLogger(ns).setLevel(getattr(logging, str(lvl).upper(), logging.WARNING))

        # Console handler (text, stderr)
        console = logging.StreamHandler(stream)
        console.setLevel(getattr(logging, cfg.level.upper(), logging.WARNING))
        if cfg.use_color and getattr(stream, "isatty", lambda: False)():
            console.setFormatter(ColorFormatter(cfg.console_pattern))
        else:
            console.setFormatter(SafeFormatter(cfg.console_pattern))
        root.addHandler(console)

        return StdLoggerService(root, cfg=cfg)

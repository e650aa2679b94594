from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from timewarp.core.timestamps.parser import DEFAULT_FORMAT

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _check_level(value: str) -> str:
    lvl = str(value).upper()
    if lvl not in _LEVELS:
        raise ValueError(f"unknown log level {value!r}; expected one of {', '.join(sorted(_LEVELS))}")
    return lvl


class LoggingSettings(BaseModel):
    # diagnostics go to stderr only; stdout carries the true/false results
    level: str = "WARNING"
    use_color: bool = True
    per_namespace_levels: dict[str, str] = Field(default_factory=dict)

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return _check_level(v)

    @field_validator("per_namespace_levels")
    @classmethod
    def _normalize_ns_levels(cls, v: dict[str, str]) -> dict[str, str]:
        return {ns: _check_level(lvl) for ns, lvl in v.items()}

    @property
    def level_no(self) -> int:
        return getattr(logging, self.level, logging.WARNING)


class TimewarpSettings(BaseModel):
    """
    Settings for one invocation.

    format: strptime pattern for the reference time and every sample
            (shorthands such as %T and %e are accepted).
    fail_fast: stop at the first sample that does not parse. When False, bad
               lines are reported and skipped, and the run still exits non-zero.
    """

    format: str = DEFAULT_FORMAT
    fail_fast: bool = True
    logging: LoggingSettings = LoggingSettings()

    @field_validator("format")
    @classmethod
    def _non_empty_format(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("format must not be empty")
        return v

"""Scoring configuration from environment variables.

Every setting has a default, so nothing needs to be configured to score a
table. CLI options and keyword arguments override these values.

Environment variables:
    FRAILTY_DIAGNOSIS_COLUMN: Column holding the diagnosis text (default: diagnosis)
    FRAILTY_COLUMN_PREFIX: Prefix of the per-fragment indicator columns (default: icd_)
    FRAILTY_COLLAPSE_DUPLICATES: Keep the published N39/F05 field collapse (default: true)
    FRAILTY_LOG_LEVEL: Log level for the frailty logger (default: INFO)
"""

import logging
import os
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("frailty")

DEFAULT_DIAGNOSIS_COLUMN = "diagnosis"
DEFAULT_COLUMN_PREFIX = "icd_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ScoringConfig:
    """Immutable scoring defaults."""

    diagnosis_column: str = DEFAULT_DIAGNOSIS_COLUMN
    column_prefix: str = DEFAULT_COLUMN_PREFIX
    collapse_duplicates: bool = True
    log_level: str = "INFO"


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
    return default


def get_config() -> ScoringConfig:
    """Read scoring config from environment."""
    return ScoringConfig(
        diagnosis_column=os.getenv("FRAILTY_DIAGNOSIS_COLUMN") or DEFAULT_DIAGNOSIS_COLUMN,
        column_prefix=os.getenv("FRAILTY_COLUMN_PREFIX", DEFAULT_COLUMN_PREFIX),
        collapse_duplicates=_parse_bool("FRAILTY_COLLAPSE_DUPLICATES", True),
        log_level=(os.getenv("FRAILTY_LOG_LEVEL") or "INFO").upper(),
    )


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a single stderr handler to the frailty logger.

    Safe to call repeatedly; the handler is only added once.
    """
    if level is None:
        level = get_config().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=False
        )
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger

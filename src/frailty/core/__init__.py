"""frailty core - Hospital Frailty Risk Score engine.

This package contains the reference table, the scorer and the exception
hierarchy. It has no I/O and no CLI dependencies so it can be embedded in
any pipeline that hands it a table or a mapping.
"""

from frailty.core.codes import HFRS_CODES, CodeWeight, indicator_columns, reference_table
from frailty.core.exceptions import ConfigurationError, DataError, FrailtyError
from frailty.core.scoring import (
    DEFAULT_GROUP,
    FRAILTY_GROUP,
    FRAILTY_GROUPS,
    FRAILTY_SCORE,
    GROUP_ORDER,
    FrailtyResult,
    add_frailty_metrics,
    classify_score,
    score_record,
    score_records,
    score_text,
    summarize_groups,
)

__all__ = [
    "DEFAULT_GROUP",
    "FRAILTY_GROUP",
    "FRAILTY_GROUPS",
    "FRAILTY_SCORE",
    "GROUP_ORDER",
    "HFRS_CODES",
    "CodeWeight",
    "ConfigurationError",
    "DataError",
    "FrailtyError",
    "FrailtyResult",
    "add_frailty_metrics",
    "classify_score",
    "indicator_columns",
    "reference_table",
    "score_record",
    "score_records",
    "score_text",
    "summarize_groups",
]

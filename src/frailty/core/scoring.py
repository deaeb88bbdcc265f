"""Hospital Frailty Risk Score calculation.

For every entry of the reference table the diagnosis text is searched for the
entry's fragment as a case-sensitive literal substring. A hit contributes the
entry's weight to the record's indicator field, the indicators are summed into
`frailty_score`, and the score is bucketed into `frailty_group`:

  - high:   frailty_score >= 15
  - medium: frailty_score >= 5
  - low:    frailty_score >= 1
  - null:   otherwise

Missing or empty diagnosis text never raises; it simply matches nothing.
A diagnosis field that does not exist raises ConfigurationError before any
record is scored.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import numpy as np
import pandas as pd

from frailty.config import get_config
from frailty.core.codes import CodeWeight, reference_table
from frailty.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

FRAILTY_SCORE = "frailty_score"
FRAILTY_GROUP = "frailty_group"

# Evaluated top to bottom, first match wins.
FRAILTY_GROUPS: tuple[tuple[float, str], ...] = (
    (15, "high"),
    (5, "medium"),
    (1, "low"),
)
DEFAULT_GROUP = "null"

# Weights are published to one decimal place; scores are summed in whole
# tenths so a total such as 2.3 + 1.9 + 0.8 is exactly 5.0.
SCORE_RESOLUTION = 10

# Lowest to highest risk
GROUP_ORDER: tuple[str, ...] = (DEFAULT_GROUP, "low", "medium", "high")


@dataclass(frozen=True)
class FrailtyResult:
    """Score of a single diagnosis text.

    Attributes:
        indicators: Read-only mapping of indicator field -> weight (or 0)
        score: Sum of all indicator values
        group: Risk category derived from the score
        matched: Fragments that contributed a weight, in table order
    """

    indicators: Mapping[str, float]
    score: float
    group: str
    matched: tuple[str, ...] = ()

    def as_fields(self) -> dict[str, Any]:
        """Return the indicator, score and group fields as a plain dict."""
        fields: dict[str, Any] = dict(self.indicators)
        fields[FRAILTY_SCORE] = self.score
        fields[FRAILTY_GROUP] = self.group
        return fields


def classify_score(score: float) -> str:
    """Map a frailty score onto its risk group."""
    for threshold, label in FRAILTY_GROUPS:
        if score >= threshold:
            return label
    return DEFAULT_GROUP


def _resolve_options(
    prefix: str | None, collapse_duplicates: bool | None
) -> tuple[str, bool]:
    if prefix is None or collapse_duplicates is None:
        config = get_config()
        if prefix is None:
            prefix = config.column_prefix
        if collapse_duplicates is None:
            collapse_duplicates = config.collapse_duplicates
    return prefix, collapse_duplicates


def _tenths(weight: float) -> int:
    return round(weight * SCORE_RESOLUTION)


def _is_missing(text: Any) -> bool:
    if text is None or text is pd.NA:
        return True
    return isinstance(text, float) and math.isnan(text)


def _require_field(field: str, available: Iterable[Any]) -> None:
    available = list(available)
    if field not in available:
        raise ConfigurationError(
            f"Diagnosis field '{field}' not found. "
            f"Available fields: {', '.join(map(str, available)) or '(none)'}",
            field=field,
            available=[str(name) for name in available],
        )
    if available.count(field) > 1:
        raise ConfigurationError(
            f"Diagnosis field '{field}' is ambiguous: "
            f"{available.count(field)} fields share that name",
            field=field,
            available=[str(name) for name in available],
        )


def score_text(
    text: str | None,
    *,
    prefix: str | None = None,
    collapse_duplicates: bool | None = None,
) -> FrailtyResult:
    """Score one free-text diagnosis field.

    Args:
        text: Diagnosis codes in any delimiter format, or None/NaN
        prefix: Indicator field prefix. Defaults to FRAILTY_COLUMN_PREFIX.
        collapse_duplicates: Keep the published N39/F05 field collapse.
            Defaults to FRAILTY_COLLAPSE_DUPLICATES.

    Returns:
        FrailtyResult with one indicator per reference field.
    """
    prefix, collapse_duplicates = _resolve_options(prefix, collapse_duplicates)
    haystack = "" if _is_missing(text) else str(text)

    indicators: dict[str, float] = {}
    matched: list[str] = []
    for key, entry in reference_table(collapse_duplicates).items():
        if entry.fragment in haystack:
            indicators[f"{prefix}{key}"] = entry.weight
            matched.append(entry.fragment)
        else:
            indicators[f"{prefix}{key}"] = 0.0

    score = sum(_tenths(value) for value in indicators.values()) / SCORE_RESOLUTION
    return FrailtyResult(
        indicators=MappingProxyType(indicators),
        score=score,
        group=classify_score(score),
        matched=tuple(matched),
    )


def score_record(
    record: Mapping[str, Any],
    diagnosis_field: str,
    *,
    prefix: str | None = None,
    collapse_duplicates: bool | None = None,
) -> dict[str, Any]:
    """Return a copy of `record` with frailty fields added.

    Raises:
        ConfigurationError: If `diagnosis_field` is not a field of `record`
    """
    _require_field(diagnosis_field, record.keys())
    result = score_text(
        record[diagnosis_field],
        prefix=prefix,
        collapse_duplicates=collapse_duplicates,
    )
    scored = dict(record)
    scored.update(result.as_fields())
    return scored


def score_records(
    records: Iterable[Mapping[str, Any]],
    diagnosis_field: str,
    *,
    prefix: str | None = None,
    collapse_duplicates: bool | None = None,
) -> list[dict[str, Any]]:
    """Score a sequence of records, preserving order.

    Every record is checked for `diagnosis_field` before any is scored, so
    a ConfigurationError never leaves a partially scored batch behind.
    """
    rows = list(records)
    for row in rows:
        _require_field(diagnosis_field, row.keys())

    prefix, collapse_duplicates = _resolve_options(prefix, collapse_duplicates)
    scored = [
        score_record(
            row,
            diagnosis_field,
            prefix=prefix,
            collapse_duplicates=collapse_duplicates,
        )
        for row in rows
    ]
    logger.info("Scored %d records on field '%s'", len(scored), diagnosis_field)
    return scored


def _indicator_values(text: pd.Series, entry: CodeWeight) -> np.ndarray:
    hits = text.str.contains(entry.fragment, regex=False, na=False)
    return np.where(hits.to_numpy(dtype=bool), entry.weight, 0.0)


def add_frailty_metrics(
    df: pd.DataFrame,
    diagnosis_column: str,
    *,
    prefix: str | None = None,
    collapse_duplicates: bool | None = None,
) -> pd.DataFrame:
    """Add HFRS indicator columns, frailty_score and frailty_group to a table.

    Args:
        df: Table with a free-text diagnosis column. Not modified.
        diagnosis_column: Name of the column holding the diagnosis codes
        prefix: Indicator column prefix. Defaults to FRAILTY_COLUMN_PREFIX.
        collapse_duplicates: Keep the published N39/F05 field collapse.
            Defaults to FRAILTY_COLLAPSE_DUPLICATES.

    Returns:
        A new DataFrame with the same rows in the same order. Columns of the
        input are kept; frailty columns it already had are overwritten.

    Raises:
        ConfigurationError: If `diagnosis_column` is not a column of `df`,
            or more than one column has that name
    """
    _require_field(diagnosis_column, df.columns)
    prefix, collapse_duplicates = _resolve_options(prefix, collapse_duplicates)

    text = df[diagnosis_column].astype("string")
    indicators = pd.DataFrame(
        {
            f"{prefix}{key}": _indicator_values(text, entry)
            for key, entry in reference_table(collapse_duplicates).items()
        },
        index=df.index,
    )

    tenths = np.zeros(len(df), dtype=np.int64)
    for column in indicators.columns:
        weights = indicators[column].to_numpy()
        tenths += np.rint(weights * SCORE_RESOLUTION).astype(np.int64)
    score = pd.Series(tenths / SCORE_RESOLUTION, index=df.index)

    conditions = [score.to_numpy() >= threshold for threshold, _ in FRAILTY_GROUPS]
    labels = [label for _, label in FRAILTY_GROUPS]
    frailty = indicators.assign(
        **{
            FRAILTY_SCORE: score,
            FRAILTY_GROUP: pd.Series(
                np.select(conditions, labels, default=DEFAULT_GROUP),
                index=df.index,
                dtype=object,
            ),
        }
    )

    out = df.copy()
    existing = [column for column in frailty.columns if column in out.columns]
    if existing:
        logger.warning("Overwriting existing frailty columns: %s", existing)
        for column in existing:
            out[column] = frailty[column]
    out = pd.concat([out, frailty.drop(columns=existing)], axis=1)

    logger.info(
        "Scored %d rows on column '%s' (%d indicator columns)",
        len(out),
        diagnosis_column,
        len(indicators.columns),
    )
    return out


def summarize_groups(df: pd.DataFrame) -> dict[str, int]:
    """Count rows per frailty group, lowest risk first.

    Every group is present in the result, with a count of 0 if unused.
    """
    if FRAILTY_GROUP not in df.columns:
        return {group: 0 for group in GROUP_ORDER}
    counts = df[FRAILTY_GROUP].value_counts()
    return {group: int(counts.get(group, 0)) for group in GROUP_ORDER}

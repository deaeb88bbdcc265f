"""Reading and writing delimited tables for the frailty CLI.

The scoring core works on DataFrames; this module is the thin layer that
turns files into DataFrames and back.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from frailty.core.exceptions import DataError
from frailty.core.scoring import FRAILTY_SCORE, summarize_groups

logger = logging.getLogger(__name__)

_SEPARATORS_BY_SUFFIX = {
    ".tsv": "\t",
    ".tab": "\t",
    ".psv": "|",
}


def infer_separator(path: Path) -> str:
    """Pick a field separator from the file suffix, defaulting to comma."""
    return _SEPARATORS_BY_SUFFIX.get(path.suffix.lower(), ",")


def default_output_path(input_path: Path) -> Path:
    """Return `<stem>_frailty.csv` next to the input file."""
    return input_path.with_name(f"{input_path.stem}_frailty.csv")


def load_table(path: Path, sep: str | None = None) -> pd.DataFrame:
    """Load a delimited file into a DataFrame.

    Args:
        path: CSV/TSV file to read
        sep: Field separator. Inferred from the suffix if not provided.

    Raises:
        DataError: If the file is missing, empty or cannot be parsed
    """
    if not path.exists():
        raise DataError(f"Input file not found: {path}", path=str(path))
    if sep is None:
        sep = infer_separator(path)

    try:
        df = pd.read_csv(path, sep=sep)
    except pd.errors.EmptyDataError as e:
        raise DataError(f"Input file is empty: {path}", path=str(path)) from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DataError(f"Could not parse {path}: {e}", path=str(path)) from e

    logger.info("Loaded %d rows from %s", len(df), path.name)
    return df


def save_table(df: pd.DataFrame, csv_path: Path) -> None:
    """Save DataFrame to CSV with error handling for locked files."""
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        df.to_csv(csv_path, index=False)
    except PermissionError:
        try:
            if csv_path.exists():
                csv_path.unlink()
            df.to_csv(csv_path, index=False)
            logger.warning("Overwrote existing CSV file: %s", csv_path)
        except PermissionError:
            logger.error(
                "CSV file %s is locked (possibly open in another application). "
                "Cannot write output.",
                csv_path,
            )
            raise
    logger.info("Saved %d rows to %s", len(df), csv_path)


def log_summary(df: pd.DataFrame) -> None:
    """Log a summary of a scored table."""
    logger.info("=== Frailty Summary ===")
    logger.info("Total rows: %d", len(df))

    if FRAILTY_SCORE in df.columns and len(df):
        scores = df[FRAILTY_SCORE]
        logger.info(
            "frailty_score: mean %.2f, max %.1f", scores.mean(), scores.max()
        )

    for group, count in summarize_groups(df).items():
        logger.info("frailty_group %s: %d/%d", group, count, len(df))

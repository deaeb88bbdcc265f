"""frailty: Hospital Frailty Risk Score for tabular diagnosis data.

Scores free-text diagnosis fields against the 109 ICD-10 fragments of the
Hospital Frailty Risk Score (Gilbert et al., Lancet 2018; 391: 1775-82).

Quick Start:
    import pandas as pd
    from frailty import add_frailty_metrics

    df = pd.DataFrame({"diagnosis": ["||T838 ,Z960", "||F001 ,W19X"]})
    scored = add_frailty_metrics(df, "diagnosis")
    print(scored[["frailty_score", "frailty_group"]])

For command-line usage, run: frailty --help
"""

__version__ = "0.1.0"

# Expose the scoring API at package level for easy imports
from frailty.core import (
    HFRS_CODES,
    CodeWeight,
    # Exceptions
    ConfigurationError,
    DataError,
    FrailtyError,
    FrailtyResult,
    # Scoring
    add_frailty_metrics,
    classify_score,
    indicator_columns,
    reference_table,
    score_record,
    score_records,
    score_text,
    summarize_groups,
)

__all__ = [
    "HFRS_CODES",
    "CodeWeight",
    "ConfigurationError",
    "DataError",
    "FrailtyError",
    "FrailtyResult",
    "__version__",
    "add_frailty_metrics",
    "classify_score",
    "indicator_columns",
    "reference_table",
    "score_record",
    "score_records",
    "score_text",
    "summarize_groups",
]

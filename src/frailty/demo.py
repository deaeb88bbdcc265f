"""Sample diagnosis records for trying out the scorer.

Four admissions in the pipe-and-comma layout of an episode extract: each
episode starts with "||" and its codes are separated by " ,".
"""

import pandas as pd

DEMO_DIAGNOSES: tuple[str, ...] = (
    "||T838 ,Z960 ,Z940 ,Z905 ,Z874 ,I10X ,R91X ,Z861",
    "||R104 ,R11X ,E119 ,E668 ,F444 ,F445 ,Z874 "
    "||R104 ,R11X ,E119 ,E668 ,F444 ,F445 ,Z874 "
    "||N201 ,E119 ,E668 ,F444 ,F445 ,Z874",
    "||R31X ,Z874 ,I480 ,Z921 ,E039 ,Z966",
    "||N390 ,I10X ,Y409 ,J450 ,Z881 ||N390 ,I10X ,Y409 ,J450 ,Z881",
)


def demo_frame(column: str = "diagnosis") -> pd.DataFrame:
    """Return the sample records as a one-column DataFrame."""
    return pd.DataFrame({column: list(DEMO_DIAGNOSES)})

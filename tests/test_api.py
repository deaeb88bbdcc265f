"""Tests for the package-level API."""

import pandas as pd

import frailty
from frailty import (
    ConfigurationError,
    FrailtyError,
    add_frailty_metrics,
    score_text,
)


def test_public_names_are_exported():
    for name in frailty.__all__:
        assert hasattr(frailty, name), name


def test_quick_start_example():
    df = pd.DataFrame({"diagnosis": ["||T838 ,Z960", "||F001 ,W19X"]})
    scored = add_frailty_metrics(df, "diagnosis")

    assert scored["frailty_score"].tolist() == [2.4, 10.3]
    assert scored["frailty_group"].tolist() == ["low", "medium"]


def test_score_text_from_package():
    assert score_text("F001").group == "medium"


def test_configuration_error_is_frailty_error():
    assert issubclass(ConfigurationError, FrailtyError)

import logging

import pytest

from frailty.config import ScoringConfig, get_config, setup_logging


def test_defaults():
    cfg = get_config()
    assert cfg == ScoringConfig()
    assert cfg.diagnosis_column == "diagnosis"
    assert cfg.column_prefix == "icd_"
    assert cfg.collapse_duplicates is True
    assert cfg.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FRAILTY_DIAGNOSIS_COLUMN", "dx_codes")
    monkeypatch.setenv("FRAILTY_COLUMN_PREFIX", "hfrs_")
    monkeypatch.setenv("FRAILTY_COLLAPSE_DUPLICATES", "no")
    monkeypatch.setenv("FRAILTY_LOG_LEVEL", "debug")

    cfg = get_config()
    assert cfg.diagnosis_column == "dx_codes"
    assert cfg.column_prefix == "hfrs_"
    assert cfg.collapse_duplicates is False
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize(
    "raw,expected",
    [("1", True), ("TRUE", True), ("on", True), ("0", False), ("Off", False)],
)
def test_collapse_flag_values(monkeypatch, raw, expected):
    monkeypatch.setenv("FRAILTY_COLLAPSE_DUPLICATES", raw)
    assert get_config().collapse_duplicates is expected


def test_invalid_collapse_flag_keeps_default(monkeypatch, caplog):
    monkeypatch.setenv("FRAILTY_COLLAPSE_DUPLICATES", "maybe")
    with caplog.at_level(logging.WARNING, logger="frailty"):
        assert get_config().collapse_duplicates is True
    assert "FRAILTY_COLLAPSE_DUPLICATES" in caplog.text


def test_empty_column_name_falls_back(monkeypatch):
    monkeypatch.setenv("FRAILTY_DIAGNOSIS_COLUMN", "")
    assert get_config().diagnosis_column == "diagnosis"


def test_config_is_immutable():
    cfg = get_config()
    with pytest.raises(AttributeError):
        cfg.column_prefix = "x_"


def test_setup_logging_is_idempotent():
    logger = setup_logging("WARNING")
    handlers = list(logger.handlers)
    setup_logging(logging.DEBUG)

    assert logger.handlers == handlers
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
    assert all(handler.level == logging.DEBUG for handler in logger.handlers)

    setup_logging("INFO")


def test_setup_logging_unknown_level_uses_info():
    logger = setup_logging("CHATTY")
    assert logger.level == logging.INFO

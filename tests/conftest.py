import pytest

_FRAILTY_ENV_VARS = (
    "FRAILTY_DIAGNOSIS_COLUMN",
    "FRAILTY_COLUMN_PREFIX",
    "FRAILTY_COLLAPSE_DUPLICATES",
    "FRAILTY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_frailty_env(monkeypatch):
    """Run every test against the built-in defaults."""
    for name in _FRAILTY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

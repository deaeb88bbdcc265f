import pandas as pd
import pytest
from typer.testing import CliRunner

from frailty.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def inject_version(monkeypatch):
    # Patch __version__ in the package where print_logo imports it
    monkeypatch.setattr("frailty.__version__", "0.0.1")


@pytest.fixture
def admissions_csv(tmp_path):
    path = tmp_path / "admissions.csv"
    pd.DataFrame(
        {
            "admission_id": [101, 102, 103],
            "diagnosis": ["||T838 ,Z960", "||F001 ,G819 ,G309 ,I698", None],
        }
    ).to_csv(path, index=False)
    return path


def test_help_shows_app_name():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "frailty CLI" in result.stdout


def test_version_option_exits_zero_and_shows_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "v0.0.1" in result.stdout


def test_unknown_command_reports_error():
    result = runner.invoke(app, ["not-a-cmd"])
    assert result.exit_code != 0
    error_message = "No such command 'not-a-cmd'"
    assert (
        error_message in result.stdout
        or (hasattr(result, "stderr") and error_message in result.stderr)
        or error_message in result.output
    )


def test_score_writes_default_output(admissions_csv):
    result = runner.invoke(app, ["score", str(admissions_csv)])
    assert result.exit_code == 0, result.output

    out = admissions_csv.with_name("admissions_frailty.csv")
    assert out.exists()
    scored = pd.read_csv(out, keep_default_na=False)
    assert scored["admission_id"].tolist() == [101, 102, 103]
    assert scored["frailty_group"].tolist() == ["low", "high", "null"]
    assert scored.loc[0, "icd_T83"] == 2.4
    assert "Frailty groups" in result.stdout


def test_score_custom_output_and_options(admissions_csv, tmp_path):
    out = tmp_path / "out" / "scored.csv"
    result = runner.invoke(
        app,
        [
            "score",
            str(admissions_csv),
            "--column",
            "diagnosis",
            "-o",
            str(out),
            "--prefix",
            "hfrs_",
            "--no-collapse",
        ],
    )
    assert result.exit_code == 0, result.output

    scored = pd.read_csv(out)
    assert "hfrs_F05" in scored.columns
    assert "hfrs_N39" in scored.columns
    assert not any(c.startswith("icd_") for c in scored.columns)


def test_score_column_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "in.csv"
    path.write_text("dx\nF001\n")
    monkeypatch.setenv("FRAILTY_DIAGNOSIS_COLUMN", "dx")

    result = runner.invoke(app, ["score", str(path)])
    assert result.exit_code == 0, result.output
    assert path.with_name("in_frailty.csv").exists()


def test_score_missing_column(admissions_csv):
    result = runner.invoke(app, ["score", str(admissions_csv), "-c", "codes"])
    assert result.exit_code == 1
    assert "Diagnosis Column Not Found" in result.stdout
    assert not admissions_csv.with_name("admissions_frailty.csv").exists()


def test_score_missing_file(tmp_path):
    result = runner.invoke(app, ["score", str(tmp_path / "missing.csv")])
    assert result.exit_code == 1
    assert "Cannot Read Input" in result.stdout


def test_text_command():
    result = runner.invoke(app, ["text", "||T838 ,Z960"])
    assert result.exit_code == 0
    assert "T83" in result.stdout
    assert "Score: 2.4" in result.stdout
    assert "Group: low" in result.stdout


def test_text_command_no_collapse():
    result = runner.invoke(app, ["text", "||N390", "--no-collapse"])
    assert result.exit_code == 0
    assert "N39" in result.stdout
    assert "Score: 3.2" in result.stdout


def test_demo_command():
    result = runner.invoke(app, ["demo"])
    assert result.exit_code == 0
    assert "Sample records" in result.stdout
    assert "null" in result.stdout
    assert "low" in result.stdout


def test_codes_command():
    result = runner.invoke(app, ["codes"])
    assert result.exit_code == 0
    assert "F00" in result.stdout
    assert "7.1" in result.stdout
    assert "Fragments: 109" in result.stdout
    assert "Indicator fields: 108" in result.stdout


def test_codes_command_no_collapse():
    result = runner.invoke(app, ["codes", "--no-collapse"])
    assert result.exit_code == 0
    assert "Indicator fields: 109" in result.stdout


def test_codes_command_shows_shared_field_when_collapsed():
    result = runner.invoke(app, ["codes"])
    assert result.exit_code == 0
    assert "icd_F05" not in result.stdout


def test_codes_command_no_collapse_shows_own_field():
    result = runner.invoke(app, ["codes", "--no-collapse"])
    assert result.exit_code == 0
    assert "icd_F05" in result.stdout


def test_score_reports_written_file(admissions_csv):
    result = runner.invoke(app, ["score", str(admissions_csv)])
    assert result.exit_code == 0, result.output
    assert "Wrote" in result.stdout


def test_console_has_no_unused_message_helpers():
    from frailty import console

    for name in ("info", "warning", "error"):
        assert not hasattr(console, name)

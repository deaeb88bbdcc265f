import logging
from pathlib import Path
from typing import Annotated

import typer

from frailty.config import get_config, logger, setup_logging
from frailty.console import (
    console,
    format_group,
    print_banner,
    print_codes_table,
    print_error_panel,
    print_group_summary,
    print_key_value,
    print_logo,
    print_scored_rows,
    success,
)
from frailty.core.codes import HFRS_CODES, reference_table
from frailty.core.exceptions import ConfigurationError, DataError
from frailty.core.scoring import add_frailty_metrics, score_text, summarize_groups
from frailty.data_io import default_output_path, load_table, log_summary, save_table
from frailty.demo import DEMO_DIAGNOSES

app = typer.Typer(
    name="frailty",
    help="frailty CLI: Score diagnosis tables with the Hospital Frailty Risk Score.",
    add_completion=False,
    rich_markup_mode="markdown",
)

CollapseOption = Annotated[
    bool | None,
    typer.Option(
        "--collapse/--no-collapse",
        help=(
            "Score F05 into the N39 field as the published script does. "
            "Use --no-collapse to give every fragment its own field."
        ),
    ),
]


def version_callback(value: bool):
    if value:
        print_logo(show_tagline=True, show_version=True)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show CLI version.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-V", help="Enable DEBUG level logging for frailty components."
        ),
    ] = False,
):
    """
    Main callback for the frailty CLI. Sets logging level.
    """
    if verbose:
        setup_logging(logging.DEBUG)
        logger.debug("Verbose mode enabled via CLI flag.")
    else:
        setup_logging()


def _print_configuration_error(e: ConfigurationError) -> None:
    hint = None
    if e.available:
        hint = f"Available columns: {', '.join(e.available)}"
    print_error_panel(
        "Diagnosis Column Not Found",
        f"Column '{e.field}' does not exist in the input.",
        hint=hint,
    )


@app.command("score")
def score_cmd(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="CSV/TSV file with one row per record.",
            metavar="INPUT",
        ),
    ],
    column: Annotated[
        str | None,
        typer.Option(
            "--column",
            "-c",
            help="Column holding the diagnosis codes. Default: FRAILTY_DIAGNOSIS_COLUMN or 'diagnosis'.",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Where to write the scored CSV. Default: <input stem>_frailty.csv.",
        ),
    ] = None,
    sep: Annotated[
        str | None,
        typer.Option("--sep", help="Field separator of INPUT. Inferred from the suffix if not set."),
    ] = None,
    prefix: Annotated[
        str | None,
        typer.Option("--prefix", help="Prefix of the indicator columns. Default: 'icd_'."),
    ] = None,
    collapse: CollapseOption = None,
):
    """
    Add HFRS indicator columns, `frailty_score` and `frailty_group` to a table.
    """
    config = get_config()
    column = column or config.diagnosis_column
    output_path = output or default_output_path(input_path)
    logger.info(f"CLI 'score' called for {input_path} (column '{column}')")

    try:
        df = load_table(input_path, sep=sep)
    except DataError as e:
        print_error_panel("Cannot Read Input", str(e))
        raise typer.Exit(code=1)

    try:
        scored = add_frailty_metrics(
            df, column, prefix=prefix, collapse_duplicates=collapse
        )
    except ConfigurationError as e:
        _print_configuration_error(e)
        raise typer.Exit(code=1)

    try:
        save_table(scored, output_path)
    except PermissionError:
        print_error_panel(
            "Cannot Write Output",
            f"{output_path} is not writable.",
            hint="Close the file if it is open elsewhere, or pass --output.",
        )
        raise typer.Exit(code=1)

    log_summary(scored)

    console.print()
    print_banner("Hospital Frailty Risk Score", f"{len(scored):,} rows scored")
    print_key_value("Input", input_path)
    print_key_value("Diagnosis column", column)
    print_key_value("Output", output_path)
    console.print()
    print_group_summary(summarize_groups(scored))
    success(f"Wrote {output_path}")


@app.command("text")
def text_cmd(
    diagnosis: Annotated[
        str,
        typer.Argument(help="Diagnosis codes in any delimiter format, e.g. '||F001 ,W19X'."),
    ],
    collapse: CollapseOption = None,
):
    """
    Score a single diagnosis string.
    """
    result = score_text(diagnosis, collapse_duplicates=collapse)
    print_key_value("Matched", ", ".join(result.matched) or "-")
    print_key_value("Score", f"{result.score:.1f}")
    print_key_value("Group", format_group(result.group))


@app.command("demo")
def demo_cmd(collapse: CollapseOption = None):
    """
    Score the built-in sample records.
    """
    rows = []
    for diagnosis in DEMO_DIAGNOSES:
        result = score_text(diagnosis, collapse_duplicates=collapse)
        rows.append(
            {
                "diagnosis": diagnosis,
                "matched": result.matched,
                "frailty_score": result.score,
                "frailty_group": result.group,
            }
        )

    print_banner("Sample records", f"{len(rows)} records")
    print_scored_rows(rows, "diagnosis")


@app.command("codes")
def codes_cmd(collapse: CollapseOption = None):
    """
    List the HFRS reference table.
    """
    config = get_config()
    if collapse is None:
        collapse = config.collapse_duplicates

    print_codes_table(
        HFRS_CODES, prefix=config.column_prefix, collapse_duplicates=collapse
    )
    print_key_value("Fragments", len(HFRS_CODES))
    print_key_value("Indicator fields", len(reference_table(collapse)))


if __name__ == "__main__":
    app()

"""
Rich-based console utilities for the frailty CLI.

Provides consistent terminal output with:
- frailty logo/branding
- Success messages and error panels
- Formatted panels and tables for scores and the reference table
"""

from collections.abc import Iterable, Mapping
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from frailty.core.codes import CodeWeight

# Custom theme for frailty
FRAILTY_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "highlight": "magenta",
        "muted": "dim",
        "brand": "bold blue",
        "path": "cyan underline",
        "command": "bold green",
    }
)

# Global console instance with custom theme
console = Console(theme=FRAILTY_THEME)

FRAILTY_LOGO = r"""
   _  _ ___ ___  ___
  | || | __| _ \/ __|
  | __ | _||   /\__ \
  |_||_|_| |_|_\|___/
"""

FRAILTY_TAGLINE = "Hospital Frailty Risk Score"

# Style per frailty group, lowest risk first
GROUP_STYLES = {
    "null": "muted",
    "low": "success",
    "medium": "warning",
    "high": "error",
}


def print_logo(show_tagline: bool = True, show_version: bool = True) -> None:
    """Print the logo with optional tagline and version."""
    from frailty import __version__

    logo_text = Text(FRAILTY_LOGO, style="bold blue")

    if show_tagline:
        logo_text.append(Text(f"\n  {FRAILTY_TAGLINE}", style="italic cyan"))

    if show_version:
        logo_text.append(Text(f"\n  v{__version__}", style="dim"))

    console.print(logo_text)


def print_banner(title: str, subtitle: str | None = None) -> None:
    """Print a styled banner for section headers."""
    content = f"[bold]{title}[/bold]"
    if subtitle:
        content += f"\n[dim]{subtitle}[/dim]"
    console.print(Panel(content, style="blue", padding=(0, 2)))


def success(message: str, prefix: str = "done") -> None:
    """Print a success message."""
    console.print(f"[success]{prefix}:[/success] {message}")


def print_key_value(key: str, value: Any, indent: int = 2) -> None:
    """Print a key-value pair."""
    spaces = " " * indent
    console.print(f"{spaces}[muted]{key}:[/muted] {value}")


def print_error_panel(title: str, message: str, hint: str | None = None) -> None:
    """Print an error in a styled panel."""
    content = f"[error]{message}[/error]"
    if hint:
        content += f"\n\n[dim]Hint: {hint}[/dim]"
    console.print(Panel(content, title=f"[error]{title}[/error]", padding=(1, 2)))


def format_group(group: str) -> str:
    """Return a frailty group wrapped in its display style."""
    style = GROUP_STYLES.get(group, "muted")
    return f"[{style}]{group}[/{style}]"


def create_table(title: str | None = None) -> Table:
    """Create a styled table."""
    return Table(
        title=title,
        show_header=True,
        header_style="bold",
        border_style="dim",
        padding=(0, 1),
    )


def print_group_summary(counts: Mapping[str, int]) -> None:
    """Print row counts per frailty group."""
    total = sum(counts.values())
    table = create_table("Frailty groups")
    table.add_column("Group", style="bold")
    table.add_column("Rows", justify="right")
    table.add_column("Share", justify="right")

    for group, count in counts.items():
        share = f"{count / total:.1%}" if total else "[muted]-[/muted]"
        table.add_row(format_group(group), f"{count:,}", share)

    console.print(table)


def print_scored_rows(rows: Iterable[Mapping[str, Any]], text_column: str) -> None:
    """Print diagnosis text, matched fragments, score and group per row.

    Args:
        rows: Dicts with keys: the text column, matched, frailty_score,
              frailty_group
        text_column: Name of the diagnosis text key
    """
    table = create_table()
    table.add_column("#", justify="right", style="muted")
    table.add_column("Diagnosis", overflow="fold")
    table.add_column("Matched")
    table.add_column("Score", justify="right")
    table.add_column("Group", justify="center")

    for i, row in enumerate(rows, start=1):
        matched = ", ".join(row["matched"]) or "[muted]-[/muted]"
        table.add_row(
            str(i),
            str(row[text_column]),
            matched,
            f"{row['frailty_score']:.1f}",
            format_group(row["frailty_group"]),
        )

    console.print(table)


def print_codes_table(
    entries: Iterable[CodeWeight],
    prefix: str = "icd_",
    collapse_duplicates: bool = True,
) -> None:
    """Print the HFRS reference table.

    The Field column shows where each fragment is scored: its own field, or
    the shared N39 field when duplicates are collapsed.
    """
    table = create_table()
    table.add_column("Fragment", style="bold", no_wrap=True)
    table.add_column("Weight", justify="right", no_wrap=True)
    table.add_column("Field", no_wrap=True)
    table.add_column("Description")

    for entry in entries:
        column = entry.column if collapse_duplicates else entry.fragment
        field = f"{prefix}{column}"
        if collapse_duplicates and entry.shadowed:
            field = f"[warning]{field}[/warning]"
        table.add_row(entry.fragment, f"{entry.weight:.1f}", field, entry.description)

    console.print(table)

"""Shared utility functions for buildassets.

Provides name normalisation, file-system helpers and Rich-based console
reporting.  Progress output always goes through a ``Console`` that callers
may construct with ``quiet=True``; error output uses a console that is never
silenced.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
error_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def normalise_name(name: str) -> str:
    """Convert a project name to the form used for binaries and identifiers.

    * Lowercases the input.
    * Replaces every space with a hyphen.

    Nothing else is touched: punctuation, unicode and repeated spaces pass
    through (each space becoming its own hyphen).

    Examples::

        normalise_name("My App") -> "my-app"
        normalise_name("my-app") -> "my-app"
        normalise_name("A  B!") -> "a--b!"
    """
    return name.lower().replace(" ", "-")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Resolve *path* to an absolute directory, creating it if missing.

    Relative paths are resolved against the current working directory.
    Missing ancestors are created with default permissions.  Any ``OSError``
    raised while creating the directory propagates unchanged.

    Returns:
        The absolute ``Path``.
    """
    dir_path = Path(path).absolute()
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(
    data: dict[str, str],
    title: str = "Summary",
    out: Console | None = None,
) -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
        out: Console to print to (defaults to the module console).
    """
    out = out or console
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    out.print(table)
    out.print()


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr.  Never silenced."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)

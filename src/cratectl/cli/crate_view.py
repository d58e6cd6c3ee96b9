"""Rich rendering of crate summaries.

Display-only: no loading, no deployment.
"""

from __future__ import annotations

from typing import Any

from cratectl.cli.console import console, escape
from cratectl.core.models import Crate


def _import_rich_table() -> type[Any] | None:
    """Return ``rich.table.Table``, or ``None`` when Rich is missing."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return None
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure)
# ---------------------------------------------------------------------------

def format_size(size: int) -> str:
    """Render a byte count as ``"512 B"``, ``"1.5 KB"`` or ``"2.0 MB"``."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def summary_rows(crate: Crate) -> list[tuple[str, str]]:
    """Return ``(label, value)`` rows describing *crate*."""
    return [
        ("Project", crate.project_name),
        ("Binary", crate.binary_name),
        ("Size", format_size(crate.payload_size)),
        ("Source URL", crate.source_url or "—"),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_crate_summary(crate: Crate, *, title: str = "Crate") -> None:
    """Print a two-column table summarising *crate*."""
    rows = summary_rows(crate)
    table_class = _import_rich_table()

    if table_class is None:
        console.print(title)
        for label, value in rows:
            console.print(f"  {label:<11} {value}")
        return

    table = table_class(
        title=title,
        show_header=False,
        border_style="dim",
    )
    table.add_column("Field", style="bold cyan", min_width=11)
    table.add_column("Value")
    for label, value in rows:
        table.add_row(label, escape(value))

    console.print()
    console.print(table)
    console.print()

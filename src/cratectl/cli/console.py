"""CLI console helpers with optional Rich support.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
keep working when it is not installed.  Without Rich, markup such as
``[bold]`` is stripped and text goes to stderr unstyled.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from cratectl.exceptions import CrateError, EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?[a-z][a-z0-9 #_.=-]*\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def strip_markup(text: str) -> str:
    """Remove Rich markup tags from *text*."""
    return _MARKUP_TAG.sub("", text)


def escape(text: str) -> str:
    """Escape *text* so Rich prints square brackets literally."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)


class _ConsoleProxy:
    """``print``-compatible proxy that prefers Rich."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            plain = [strip_markup(obj) if isinstance(obj, str) else obj for obj in objects]
            print(*plain, file=sys.stderr)
            return
        rich_console.print(*objects)

    def success(self, message: str) -> None:
        self.print(f"[bold green]{message}[/bold green]")

    def error(self, exc: CrateError) -> None:
        """Render a domain error and its hint."""
        self.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            self.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


console = _ConsoleProxy()

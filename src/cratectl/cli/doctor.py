"""``cratectl doctor`` — environment diagnostics command.

Collects whether this machine can pull and install crates and renders
the result as a Rich table (plain text without Rich).  Purely
diagnostic: nothing is written.
"""

from __future__ import annotations

import platform
import sys

from cratectl.cli import exit_codes
from cratectl.cli.console import console
from cratectl.infra.privilege import default_privilege_checker
from cratectl.utils.constants import SYSTEM_BIN_DIR, UNSUPPORTED_SYSTEMS
from cratectl.version import __version__

Check = tuple[str, str, str]
"""``(label, value, status)`` where status is ``OK``, ``WARN`` or ``FAIL``."""


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _cratectl_version_check() -> Check:
    return "cratectl", __version__, "OK"


def _python_version_check() -> Check:
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", version, "OK" if ok else "FAIL"


def _requests_check() -> Check:
    """``pull`` cannot work without requests."""
    try:
        import requests
    except ImportError:
        return "requests", "NOT INSTALLED", "FAIL"
    return "requests", str(getattr(requests, "__version__", "unknown")), "OK"


def _os_check() -> Check:
    system = platform.system()
    display = {"Darwin": "macOS"}.get(system, system)
    value = f"{display} {platform.release()} ({platform.machine()})"
    return "OS", value, "OK"


def _bin_dir_check() -> Check:
    """Install/uninstall need a ``/bin``-style directory."""
    if platform.system() in UNSUPPORTED_SYSTEMS or not SYSTEM_BIN_DIR.is_dir():
        return "Install dir", f"{SYSTEM_BIN_DIR} (unsupported)", "WARN"
    return "Install dir", str(SYSTEM_BIN_DIR), "OK"


def _privilege_check() -> Check:
    if default_privilege_checker().is_elevated():
        return "Privileges", "elevated", "OK"
    return "Privileges", "not elevated (install will ask for sudo)", "WARN"


_STATUS_STYLE: dict[str, str] = {
    "OK": "[green]OK[/green]",
    "WARN": "[yellow]WARN[/yellow]",
    "FAIL": "[red]FAIL[/red]",
}


def collect_checks() -> list[Check]:
    return [
        _cratectl_version_check(),
        _python_version_check(),
        _requests_check(),
        _os_check(),
        _bin_dir_check(),
        _privilege_check(),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_plain_table(checks: list[Check]) -> None:
    print("\ncratectl doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<42} {'Status':<6}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<42} {status:<6}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_table(checks: list[Check]) -> bool:
    """Render with Rich; return ``False`` when Rich is unavailable."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return False

    table = Table(
        title="cratectl doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=6)
    for label, value, status in checks:
        table.add_row(label, value, _STATUS_STYLE.get(status, status))

    console.print()
    console.print(table)
    console.print()
    return True


def run_doctor() -> int:
    """Run every diagnostic check and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` unless a check reports ``FAIL``, in
        which case :data:`exit_codes.GENERAL_ERROR`.
    """
    checks = collect_checks()
    if not _print_rich_table(checks):
        _print_plain_table(checks)

    if any(status == "FAIL" for _, _, status in checks):
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS

"""CLI application entry point and command routing for cratectl.

This module is the **sole error boundary** for the application.  It
catches :class:`~cratectl.exceptions.CrateError`, ``KeyboardInterrupt``
and any unexpected ``Exception``, renders a message via Rich and exits
with the code :func:`~cratectl.cli.exit_codes.exit_code_for` assigns.

Architecture notes
------------------
* No crate logic lives here — handlers gather input, call the
  :class:`~cratectl.core.crate_manager.CrateManager` and report.
* Collaborators are created by the ``_make_*`` factories so tests can
  swap them for fakes.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from cratectl.cli import exit_codes
from cratectl.cli.console import console, escape
from cratectl.cli.crate_view import render_crate_summary
from cratectl.cli.progress import TransferProgress
from cratectl.cli.prompts import QuestionaryInputProvider, require_answer
from cratectl.core.crate_manager import CrateManager, crate_file_name
from cratectl.core.protocols import InputProvider, PrivilegeChecker, Transport
from cratectl.exceptions import CrateError, UsageError
from cratectl.infra.http_transport import ProgressCallback, RequestsTransport
from cratectl.infra.privilege import default_privilege_checker
from cratectl.utils.log import configure_logging
from cratectl.version import __version__

logger = logging.getLogger(__name__)

COMMAND_ALIASES: dict[str, str] = {
    "build": "build",
    "b": "build",
    "install": "install",
    "i": "install",
    "uninstall": "uninstall",
    "u": "uninstall",
    "get-bin": "get-bin",
    "g": "get-bin",
    "pull": "pull",
    "p": "pull",
    "doctor": "doctor",
}

PULL_ACTIONS: tuple[str, str] = ("install", "save")

_EPILOG = """\
commands:
  build   | b                build a crate from a binary (interactive)
  install | i   <crate>      install a crate's binary system-wide
  uninstall | u <crate>      remove a crate's installed binary
  get-bin | g   <crate>      unpack a crate's binary into a directory
  pull    | p   <url>        fetch a crate over HTTP, then install or save it
  doctor                     check this machine's environment
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cratectl",
        description="Build, install and unpack single-binary crates.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        help="Command to run (case-insensitive).",
    )
    parser.add_argument(
        "argument",
        nargs="?",
        default=None,
        help="Crate file path, or source URL for 'pull'.",
    )
    return parser


def resolve_command(name: str) -> str:
    """Map a command alias such as ``"I"`` or ``"Get-bin"`` to its canonical name.

    Raises
    ------
    UsageError
        If *name* is not a known command.
    """
    command = COMMAND_ALIASES.get(name.lower())
    if command is None:
        raise UsageError(
            f"Unknown command: {name}",
            hint="Run 'cratectl --help' to list the available commands.",
        )
    return command


# ---------------------------------------------------------------------------
# Collaborator factories
# ---------------------------------------------------------------------------

def _make_input_provider() -> InputProvider:
    return QuestionaryInputProvider()


def _make_privilege_checker() -> PrivilegeChecker:
    return default_privilege_checker()


def _make_transport(progress_callback: ProgressCallback | None = None) -> Transport:
    return RequestsTransport(progress_callback=progress_callback)


def _make_manager(
    privileges: PrivilegeChecker,
    transport: Transport | None = None,
) -> CrateManager:
    return CrateManager(
        transport=transport if transport is not None else _make_transport(),
        privileges=privileges,
    )


def _require_argument(argument: str | None, what: str) -> str:
    if not argument:
        raise UsageError(f"Please provide a {what}.")
    return argument


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_build(inputs: InputProvider, manager: CrateManager) -> int:
    """Prompt for build inputs and write ``<project>.json`` to the CWD."""
    console.print("[bold]Crating the project…[/bold]")
    project_name = require_answer(inputs, "Enter the project name:", "project name")
    binary_path = require_answer(inputs, "Enter the binary file path:", "binary file path")
    source_url = inputs.read_line("Enter the source URL (optional, press Enter to skip):")

    crate = manager.build(project_name, binary_path, source_url)
    saved = manager.persist(crate, crate_file_name(crate.project_name))
    console.success(f"Crate saved to {escape(str(saved))}")
    return exit_codes.SUCCESS


def _handle_install(
    crate_path: str,
    args: Sequence[str],
    privileges: PrivilegeChecker,
    manager: CrateManager,
) -> int:
    if not privileges.is_elevated():
        console.print("[yellow]Root access is required to install crates. Rerunning with sudo…[/yellow]")
        return privileges.elevate(args)

    crate = manager.load(crate_path)
    manager.require_payload(crate)
    render_crate_summary(crate, title="Crate loaded")
    target = manager.install(crate)
    console.success(f"Crate installed successfully: {escape(str(target))}")
    return exit_codes.SUCCESS


def _handle_uninstall(
    crate_path: str,
    args: Sequence[str],
    privileges: PrivilegeChecker,
    manager: CrateManager,
) -> int:
    if not privileges.is_elevated():
        console.print("[yellow]Root access is required to uninstall crates. Rerunning with sudo…[/yellow]")
        return privileges.elevate(args)

    crate = manager.load(crate_path)
    target = manager.uninstall(crate)
    console.success(f"Crate uninstalled successfully: {escape(str(target))}")
    return exit_codes.SUCCESS


def _handle_unpack(crate_path: str, inputs: InputProvider, manager: CrateManager) -> int:
    crate = manager.load(crate_path)
    # Fail before prompting when there is nothing to unpack.
    manager.require_payload(crate)

    prefix = require_answer(inputs, "Enter the prefix path to unpack the binary:", "prefix path")
    target = manager.unpack(crate, prefix)
    console.success(f"Binary unpacked successfully at: {escape(str(target))}")
    return exit_codes.SUCCESS


def _handle_pull(
    url: str,
    args: Sequence[str],
    inputs: InputProvider,
    privileges: PrivilegeChecker,
) -> int:
    """Fetch a crate, then install it or save it as ``<project>.json``.

    Choosing *install* without elevated rights relaunches the whole
    ``pull`` under the privilege helper, which fetches again.
    """
    console.print(f"Pulling crate from source URL: {escape(url)}")
    with TransferProgress(url) as progress:
        manager = _make_manager(privileges, _make_transport(progress))
        crate = manager.pull(url)

    render_crate_summary(crate, title="Crate pulled")
    action = inputs.choose("Do you want to install or save the crate?", PULL_ACTIONS)

    if action == "install":
        if not privileges.is_elevated():
            console.print("[yellow]Root access is required to install crates. Rerunning with sudo…[/yellow]")
            return privileges.elevate(args)
        target = manager.install(crate)
        console.success(f"Crate installed successfully: {escape(str(target))}")
        return exit_codes.SUCCESS

    saved = manager.persist(crate, crate_file_name(crate.project_name))
    console.success(f"Crate saved successfully at: {escape(str(saved))}")
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    from cratectl.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the cratectl CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  The same list is replayed when the privilege helper
        relaunches the process.

    Returns
    -------
    int
        OS process exit code.
    """
    raw_args = list(argv) if argv is not None else sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_args(raw_args)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    command = resolve_command(args.command)
    logger.debug("Dispatching %s", command)

    if command == "doctor":
        return _handle_doctor()

    if command == "build":
        privileges = _make_privilege_checker()
        return _handle_build(_make_input_provider(), _make_manager(privileges))

    if command == "pull":
        url = _require_argument(args.argument, "source URL to pull the crate")
        return _handle_pull(url, raw_args, _make_input_provider(), _make_privilege_checker())

    crate_path = _require_argument(args.argument, "crate file path")
    privileges = _make_privilege_checker()
    manager = _make_manager(privileges)

    if command == "install":
        return _handle_install(crate_path, raw_args, privileges, manager)
    if command == "uninstall":
        return _handle_uninstall(crate_path, raw_args, privileges, manager)
    return _handle_unpack(crate_path, _make_input_provider(), manager)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` so the process never exits with a raw stack trace
    during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except CrateError as exc:
        console.error(exc)
        sys.exit(exit_codes.exit_code_for(exc))
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

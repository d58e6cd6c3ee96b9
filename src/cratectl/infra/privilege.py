"""Privilege helpers — implementations of :class:`~cratectl.core.protocols.PrivilegeChecker`.

Installing and uninstalling write into the system binary directory, so
the CLI checks :meth:`is_elevated` first and, when it is not, hands the
whole invocation to :meth:`elevate`.  The relaunch is a one-shot
parent → child handoff: the parent waits and returns the child's exit
status.

Rules
-----
* No ``print()`` — the CLI tells the user what is happening.
* ``subprocess`` failures surface as :class:`~cratectl.exceptions.PrivilegeError`.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Sequence

from cratectl.exceptions import PrivilegeError, UnsupportedPlatformError

logger = logging.getLogger(__name__)


class PosixPrivilegeChecker:
    """Root check by effective uid, elevation by relaunching under ``sudo``."""

    def __init__(self, *, sudo: str = "sudo", python: str | None = None) -> None:
        self._sudo: str = sudo
        self._python: str = python if python is not None else sys.executable

    def is_elevated(self) -> bool:
        return os.geteuid() == 0

    def build_command(self, args: Sequence[str]) -> list[str]:
        """Return the relaunch command line for *args*."""
        return [self._sudo, self._python, "-m", "cratectl", *args]

    def elevate(self, args: Sequence[str]) -> int:
        """Relaunch ``cratectl`` with *args* under sudo and wait for it.

        The child inherits stdin/stdout/stderr so its prompts and output
        reach the user directly.

        Raises
        ------
        PrivilegeError
            If sudo cannot be started.
        """
        command = self.build_command(args)
        logger.debug("Relaunching with elevated rights: %s", command)
        try:
            completed = subprocess.run(command, check=False)
        except OSError as exc:
            raise PrivilegeError(
                f"Error rerunning with {self._sudo}: {exc}",
                hint="Run the command again as root.",
            ) from exc
        return completed.returncode


class UnsupportedPrivilegeChecker:
    """Checker for platforms where cratectl cannot elevate itself."""

    def __init__(self, system: str = "Windows") -> None:
        self._system: str = system

    def is_elevated(self) -> bool:
        return False

    def elevate(self, args: Sequence[str]) -> int:
        raise UnsupportedPlatformError(
            f"Can't rerun with admin privileges on {self._system}.",
            hint="Use 'get-bin' to unpack the binary into a directory instead.",
        )


class NoopPrivilegeChecker:
    """Always-elevated checker for containers, embedding and tests."""

    def is_elevated(self) -> bool:
        return True

    def elevate(self, args: Sequence[str]) -> int:
        # Already elevated, so there is nothing to relaunch.
        return 0


def default_privilege_checker() -> PosixPrivilegeChecker | UnsupportedPrivilegeChecker:
    """Return the checker matching the running OS family."""
    if os.name == "posix":
        return PosixPrivilegeChecker()
    return UnsupportedPrivilegeChecker()

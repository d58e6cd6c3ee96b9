"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from cratectl.core.models import TransportResponse


class Transport(Protocol):
    """Contract for fetching a crate document from a remote location.

    Any object that implements :meth:`get` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def get(self, url: str) -> TransportResponse:
        """Perform a GET against *url* and return the full response.

        Non-OK statuses are returned, not raised; the caller decides.

        Raises
        ------
        TransportError
            When the request itself fails (DNS, connection, timeout).
        """
        ...  # pragma: no cover


class PrivilegeChecker(Protocol):
    """Contract for deciding whether protected paths may be written.

    Implementations vary per OS: an euid check with a ``sudo`` relaunch,
    an always-elevated no-op for containers, or a refusal on platforms
    without an elevation mechanism.
    """

    def is_elevated(self) -> bool:
        """Return ``True`` when the current process holds elevated rights."""
        ...  # pragma: no cover

    def elevate(self, args: Sequence[str]) -> int:
        """Relaunch cratectl with *args* under elevated rights.

        Blocks until the child exits and returns its exit status.

        Raises
        ------
        PrivilegeError
            When the elevation mechanism cannot be started.
        UnsupportedPlatformError
            When the platform offers no elevation mechanism.
        """
        ...  # pragma: no cover


class InputProvider(Protocol):
    """Contract for gathering interactive input one answer at a time."""

    def read_line(self, prompt: str, *, default: str = "") -> str:
        """Ask *prompt* and return the answer without surrounding whitespace.

        Raises
        ------
        PromptCancelledError
            When the user dismisses the prompt.
        """
        ...  # pragma: no cover

    def choose(self, prompt: str, choices: Sequence[str]) -> str:
        """Ask *prompt* and return one of *choices*.

        Raises
        ------
        PromptCancelledError
            When the user dismisses the prompt.
        """
        ...  # pragma: no cover

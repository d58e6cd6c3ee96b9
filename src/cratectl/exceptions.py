"""Custom exception hierarchy for cratectl.

All exceptions that cross layer boundaries must inherit from
:class:`CrateError`.  Raw ``OSError``, JSON/base64 decoding errors and
``requests`` exceptions must NEVER propagate beyond the layer that
caught them — they are re-raised as a typed subclass defined here.

Hierarchy
---------
CrateError
├── CrateIOError
├── AlreadyExistsError
├── DecodeError
├── TransportError
├── UnsupportedPlatformError
├── EmptyPayloadError
├── InvalidCrateError
├── InvalidURLError
├── PrivilegeError
├── PromptCancelledError
├── UsageError
└── EnvironmentError
"""

from __future__ import annotations


class CrateError(Exception):
    """Base exception for all cratectl errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    and pick a discrete exit code.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Filesystem ------------------------------------------------------------

class CrateIOError(CrateError):
    """Raised when a file cannot be opened, created, read, written or removed."""


class AlreadyExistsError(CrateError):
    """Raised when persisting a crate would overwrite an existing file."""


# --- Crate documents -------------------------------------------------------

class DecodeError(CrateError):
    """Raised when data is not a valid crate document."""


class InvalidCrateError(CrateError):
    """Raised when build inputs cannot form a valid crate."""


class EmptyPayloadError(CrateError):
    """Raised when a deploy operation meets a crate without binary bytes."""


# --- Network ---------------------------------------------------------------

class InvalidURLError(CrateError):
    """Raised when a pull URL fails validation."""


class TransportError(CrateError):
    """Raised when an HTTP request fails or returns a non-OK status."""


# --- Platform / privileges -------------------------------------------------

class UnsupportedPlatformError(CrateError):
    """Raised when an operation is not available on the running OS."""


class PrivilegeError(CrateError):
    """Raised when an operation needs elevated rights the process lacks."""


# --- CLI -------------------------------------------------------------------

class PromptCancelledError(CrateError):
    """Raised when the user dismisses an interactive prompt."""


class UsageError(CrateError):
    """Raised for an unknown command or a missing positional argument."""


class EnvironmentError(CrateError):
    """Raised when a required runtime dependency is not available."""

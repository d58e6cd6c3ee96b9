"""Exit-code constants and the error → exit-code mapping.

Centralised here so that every exit path uses a well-known, tested
value.  Each error kind gets its own code so scripts can react without
parsing stderr.  Invalid build input and invalid pull URLs count as usage
errors, and a dismissed prompt exits like Ctrl+C.  Anything else,
including a missing runtime package (``EnvironmentError``), exits with
:data:`GENERAL_ERROR`.
"""

from __future__ import annotations

from cratectl.exceptions import (
    AlreadyExistsError,
    CrateIOError,
    DecodeError,
    EmptyPayloadError,
    InvalidCrateError,
    InvalidURLError,
    PrivilegeError,
    PromptCancelledError,
    TransportError,
    UnsupportedPlatformError,
    UsageError,
)

SUCCESS: int = 0
"""Clean exit — command completed without error."""

GENERAL_ERROR: int = 1
"""A CrateError without a more specific code was caught."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

IO_ERROR: int = 3
ALREADY_EXISTS: int = 4
DECODE_ERROR: int = 5
TRANSPORT_ERROR: int = 6
UNSUPPORTED_PLATFORM: int = 7
EMPTY_PAYLOAD: int = 8
PERMISSION_DENIED: int = 9

USAGE_ERROR: int = 64
"""Unknown command or missing argument (BSD ``EX_USAGE``)."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

_CODES_BY_ERROR: dict[type[BaseException], int] = {
    CrateIOError: IO_ERROR,
    AlreadyExistsError: ALREADY_EXISTS,
    DecodeError: DECODE_ERROR,
    TransportError: TRANSPORT_ERROR,
    UnsupportedPlatformError: UNSUPPORTED_PLATFORM,
    EmptyPayloadError: EMPTY_PAYLOAD,
    PrivilegeError: PERMISSION_DENIED,
    UsageError: USAGE_ERROR,
    InvalidCrateError: USAGE_ERROR,
    InvalidURLError: USAGE_ERROR,
    PromptCancelledError: KEYBOARD_INTERRUPT,
}


def exit_code_for(exc: BaseException) -> int:
    """Return the exit code for *exc*, honouring subclassing."""
    for cls in type(exc).__mro__:
        code = _CODES_BY_ERROR.get(cls)
        if code is not None:
            return code
    return GENERAL_ERROR

"""Infrastructure layer — external system integration.

This layer wraps HTTP access (``requests``) and OS privilege handling.
Every raw third-party or ``OSError`` exception must be caught here and
re-raised as a :class:`~cratectl.exceptions.CrateError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from cratectl.infra.http_transport import RequestsTransport
from cratectl.infra.privilege import (
    NoopPrivilegeChecker,
    PosixPrivilegeChecker,
    UnsupportedPrivilegeChecker,
    default_privilege_checker,
)

__all__: list[str] = [
    "NoopPrivilegeChecker",
    "PosixPrivilegeChecker",
    "RequestsTransport",
    "UnsupportedPrivilegeChecker",
    "default_privilege_checker",
]

"""Core layer — the crate model, its document codec and lifecycle.

Rules
-----
* No ``print()`` calls and no process exit.
* No network access except through the injected ``Transport``.
* No imports from ``cli`` or ``infra``.
"""

from cratectl.core.codec import decode_crate, encode_crate
from cratectl.core.crate_manager import CrateManager
from cratectl.core.models import Crate, TransportResponse
from cratectl.core.protocols import InputProvider, PrivilegeChecker, Transport

__all__: list[str] = [
    "Crate",
    "CrateManager",
    "InputProvider",
    "PrivilegeChecker",
    "Transport",
    "TransportResponse",
    "decode_crate",
    "encode_crate",
]

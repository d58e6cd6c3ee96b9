"""Domain models for cratectl.

All models are **frozen** dataclasses — immutable value objects with no
I/O and no dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Crate
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Crate:
    """A packaged executable plus the metadata needed to deploy it."""

    project_name: str
    """Human-readable identifier chosen at build time."""

    binary_name: str
    """File name (never a path) the payload is installed under."""

    binary_payload: bytes = field(repr=False)
    """Raw executable bytes."""

    source_url: str = ""
    """Provenance note.  Informational only, never dereferenced."""

    @property
    def has_payload(self) -> bool:
        return len(self.binary_payload) > 0

    @property
    def payload_size(self) -> int:
        return len(self.binary_payload)


# ---------------------------------------------------------------------------
# Transport result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Outcome of a single HTTP GET as seen by the core layer."""

    status_code: int
    body: bytes = field(repr=False)
    url: str = ""

"""Tunables shared across layers.

cratectl reads no config files and no environment variables; library
callers override these through constructor arguments instead.
"""

from __future__ import annotations

from pathlib import Path

from cratectl.version import __version__

SYSTEM_BIN_DIR: Path = Path("/bin")
"""Directory that ``install``/``uninstall`` target."""

CRATE_EXTENSION: str = ".json"
"""Suffix of crate documents written by ``build`` and ``pull``."""

EXECUTABLE_MODE: int = 0o755
"""Permission bits applied to installed and unpacked binaries."""

DEFAULT_PULL_TIMEOUT: float = 30.0
"""Seconds before a pull request gives up (connect and per-read)."""

DOWNLOAD_CHUNK_SIZE: int = 64 * 1024

USER_AGENT: str = f"cratectl/{__version__}"

UNSUPPORTED_SYSTEMS: tuple[str, ...] = ("Windows",)
"""``platform.system()`` values without a ``/bin``-style directory."""

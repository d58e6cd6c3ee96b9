"""Crate Manager — the crate lifecycle.

Build → persist/pull → load → install / uninstall / unpack.

The manager is the only place that touches crate files and installed
binaries.  Network access goes through an injected
:class:`~cratectl.core.protocols.Transport` and privilege decisions
through an injected :class:`~cratectl.core.protocols.PrivilegeChecker`,
so every operation is testable against ``tmp_path`` and fakes.

Guarantees
----------
* No ``print()`` and no process exit — failures are raised as
  :class:`~cratectl.exceptions.CrateError` subclasses.
* No raw ``OSError`` escapes; each is wrapped with ``from exc``.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

from cratectl.core.codec import decode_crate, encode_crate, is_safe_component
from cratectl.core.models import Crate
from cratectl.core.protocols import PrivilegeChecker, Transport
from cratectl.exceptions import (
    AlreadyExistsError,
    CrateError,
    CrateIOError,
    EmptyPayloadError,
    InvalidCrateError,
    InvalidURLError,
    PrivilegeError,
    TransportError,
    UnsupportedPlatformError,
)
from cratectl.utils.constants import (
    CRATE_EXTENSION,
    EXECUTABLE_MODE,
    SYSTEM_BIN_DIR,
    UNSUPPORTED_SYSTEMS,
)

logger = logging.getLogger(__name__)

HTTP_OK = 200


def crate_file_name(project_name: str) -> str:
    """Return the default document name for *project_name* (``tool.json``).

    Raises
    ------
    InvalidCrateError
        If *project_name* cannot be used as a file name.
    """
    if not is_safe_component(project_name):
        raise InvalidCrateError(
            f"Project name {project_name!r} cannot be used as a file name.",
            hint="Only crates whose project name is a plain file name can be saved.",
        )
    return f"{project_name}{CRATE_EXTENSION}"


class CrateManager:
    """Performs every crate lifecycle operation.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`Transport` protocol.
    privileges:
        Any object satisfying the :class:`PrivilegeChecker` protocol.
    bin_dir:
        System binary directory targeted by install and uninstall.
    system:
        ``platform.system()`` style OS name.  Detected when ``None``.
    """

    def __init__(
        self,
        *,
        transport: Transport,
        privileges: PrivilegeChecker,
        bin_dir: Path = SYSTEM_BIN_DIR,
        system: str | None = None,
    ) -> None:
        self._transport: Transport = transport
        self._privileges: PrivilegeChecker = privileges
        self._bin_dir: Path = Path(bin_dir)
        self._system: str = system if system is not None else platform.system()

    @property
    def bin_dir(self) -> Path:
        return self._bin_dir

    # ------------------------------------------------------------------
    # Build / persist / load
    # ------------------------------------------------------------------

    def build(
        self,
        project_name: str,
        binary_path: str | os.PathLike[str],
        source_url: str = "",
    ) -> Crate:
        """Read *binary_path* fully and wrap it in a new :class:`Crate`.

        The binary name is the final segment of *binary_path*.  Nothing
        is written.

        Raises
        ------
        InvalidCrateError
            If *project_name* or the binary's file name is empty or
            contains a path separator.
        CrateIOError
            If the binary cannot be opened or read.
        """
        project_name = project_name.strip()
        if not is_safe_component(project_name):
            raise InvalidCrateError(
                f"Invalid project name: {project_name!r}",
                hint="Use a non-empty name without '/' or '\\'.",
            )

        path = Path(binary_path)
        if not is_safe_component(path.name):
            raise InvalidCrateError(
                f"Invalid binary file name: {path.name!r}",
                hint="Rename the binary so its name has no '\\' in it.",
            )
        try:
            payload = path.read_bytes()
        except OSError as exc:
            raise CrateIOError(f"Cannot read binary file {path}: {exc}") from exc

        if not payload:
            logger.warning("Binary file %s is empty; the crate cannot be deployed", path)

        crate = Crate(
            project_name=project_name,
            binary_name=path.name,
            binary_payload=payload,
            source_url=source_url,
        )
        logger.debug(
            "Built crate %s from %s (%d bytes)", crate.project_name, path, crate.payload_size,
        )
        return crate

    def persist(self, crate: Crate, destination: str | os.PathLike[str]) -> Path:
        """Write *crate* to *destination*, never replacing an existing file.

        Raises
        ------
        AlreadyExistsError
            If anything already exists at *destination*.
        CrateIOError
            If the file cannot be created or written.
        """
        path = Path(destination)
        document = encode_crate(crate).encode("utf-8")
        try:
            # "x" makes the existence check and the create a single step.
            with path.open("xb") as handle:
                handle.write(document)
        except FileExistsError as exc:
            raise AlreadyExistsError(
                f"File already exists at {path}",
                hint="Move or delete the existing crate, or pick another name.",
            ) from exc
        except OSError as exc:
            raise CrateIOError(f"Cannot write crate to {path}: {exc}") from exc

        logger.info("Saved crate %s to %s", crate.project_name, path)
        return path

    def load(self, source: str | os.PathLike[str]) -> Crate:
        """Read and decode the crate document at *source*.

        Raises
        ------
        CrateIOError
            If the file is missing or unreadable.
        DecodeError
            If the content is not a valid crate document.
        """
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise CrateIOError(f"Cannot open crate file {path}: {exc}") from exc

        crate = decode_crate(data)
        logger.debug("Loaded crate %s from %s", crate.project_name, path)
        return crate

    # ------------------------------------------------------------------
    # Deploy
    # ------------------------------------------------------------------

    def install(self, crate: Crate) -> Path:
        """Write the payload into the system binary directory.

        Raises
        ------
        EmptyPayloadError
            If the crate carries no binary bytes.
        UnsupportedPlatformError
            If this OS has no ``/bin``-style directory.
        PrivilegeError
            If the process is not elevated.
        CrateIOError
            If the binary cannot be written.
        """
        self.require_payload(crate)
        self._require_supported_platform()
        self._require_elevated("install")

        target = self._bin_dir / crate.binary_name
        self._write_executable(target, crate.binary_payload)
        logger.info("Installed %s to %s", crate.binary_name, target)
        return target

    def uninstall(self, crate: Crate) -> Path:
        """Remove the installed binary named after *crate*.

        Only ``binary_name`` is used; the payload may be empty.

        Raises
        ------
        PrivilegeError
            If the process is not elevated.
        CrateIOError
            If the binary does not exist or cannot be removed.
        """
        self._require_elevated("uninstall")

        target = self._bin_dir / crate.binary_name
        try:
            target.unlink()
        except FileNotFoundError as exc:
            raise CrateIOError(
                f"{crate.binary_name} is not installed in {self._bin_dir}",
            ) from exc
        except OSError as exc:
            raise CrateIOError(f"Cannot remove {target}: {exc}") from exc

        logger.info("Removed %s", target)
        return target

    def unpack(self, crate: Crate, destination_prefix: str | os.PathLike[str]) -> Path:
        """Write the payload to ``destination_prefix/binary_name``.

        Needs no privileges.  The prefix directory must already exist.

        Raises
        ------
        EmptyPayloadError
            If the crate carries no binary bytes.
        CrateIOError
            If the binary cannot be written.
        """
        self.require_payload(crate)

        target = Path(destination_prefix) / crate.binary_name
        self._write_executable(target, crate.binary_payload)
        logger.info("Unpacked %s to %s", crate.binary_name, target)
        return target

    # ------------------------------------------------------------------
    # Pull
    # ------------------------------------------------------------------

    def pull(self, source_url: str) -> Crate:
        """Fetch and decode a crate document from *source_url*.

        Nothing is written; the caller persists or installs the result.

        Raises
        ------
        InvalidURLError
            If *source_url* is empty or not HTTP(S).
        TransportError
            If the request fails or the status is not 200.
        DecodeError
            If the body is not a valid crate document.
        """
        url = self._validate_url(source_url)

        try:
            response = self._transport.get(url)
        except CrateError:
            raise
        except Exception as exc:
            raise TransportError(f"Unexpected transport error: {exc}") from exc

        if response.status_code != HTTP_OK:
            raise TransportError(
                f"Failed to pull crate from {url}: HTTP {response.status_code}",
            )

        crate = decode_crate(response.body)
        logger.info("Pulled crate %s from %s", crate.project_name, url)
        return crate

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_url(url: str) -> str:
        stripped = url.strip()
        if not stripped:
            raise InvalidURLError("A source URL is required to pull a crate.")
        if not stripped.startswith(("http://", "https://")):
            raise InvalidURLError(
                f"Invalid URL: {stripped}",
                hint="URL must start with http:// or https://",
            )
        return stripped

    @staticmethod
    def require_payload(crate: Crate) -> None:
        """Raise :class:`EmptyPayloadError` unless *crate* carries bytes."""
        if not crate.has_payload:
            raise EmptyPayloadError(
                f"No binary file found in crate: {crate.project_name}",
            )

    def _require_supported_platform(self) -> None:
        if self._system in UNSUPPORTED_SYSTEMS:
            raise UnsupportedPlatformError(
                f"Installing crates is not supported on {self._system}.",
                hint="Use 'get-bin' to unpack the binary into a directory instead.",
            )
        if not self._bin_dir.is_dir():
            raise UnsupportedPlatformError(
                f"System binary directory {self._bin_dir} does not exist.",
                hint="Use 'get-bin' to unpack the binary into a directory instead.",
            )

    def _require_elevated(self, operation: str) -> None:
        if not self._privileges.is_elevated():
            raise PrivilegeError(
                f"Root access is required to {operation} crates.",
                hint="Re-run the command with sudo.",
            )

    @staticmethod
    def _write_executable(target: Path, payload: bytes) -> None:
        try:
            target.write_bytes(payload)
            # write_bytes keeps the mode of an existing file, so set it explicitly.
            target.chmod(EXECUTABLE_MODE)
        except OSError as exc:
            raise CrateIOError(f"Cannot write binary file {target}: {exc}") from exc

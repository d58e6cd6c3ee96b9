"""Crate document encoding and decoding.

A crate document is a single JSON object with four named fields::

    {
      "ProjectName": "tool",
      "BinaryName": "tool",
      "BinaryFile": "f0VMRg==",
      "SourceURL": ""
    }

``BinaryFile`` holds the payload as standard base64 text.  Decoding
matches field names case-insensitively and ignores unknown fields, so
documents written by older or newer tools remain loadable.

Every function here is pure — no I/O.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from cratectl.core.models import Crate
from cratectl.exceptions import DecodeError

PROJECT_NAME_KEY = "ProjectName"
BINARY_NAME_KEY = "BinaryName"
BINARY_FILE_KEY = "BinaryFile"
SOURCE_URL_KEY = "SourceURL"


# ---------------------------------------------------------------------------
# Name validation
# ---------------------------------------------------------------------------

def is_safe_component(name: str) -> bool:
    """Return ``True`` when *name* is usable as a single path component."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and "\x00" not in name


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def crate_to_document(crate: Crate) -> dict[str, str]:
    """Convert *crate* into its field-tagged document form."""
    return {
        PROJECT_NAME_KEY: crate.project_name,
        BINARY_NAME_KEY: crate.binary_name,
        BINARY_FILE_KEY: base64.b64encode(crate.binary_payload).decode("ascii"),
        SOURCE_URL_KEY: crate.source_url,
    }


def encode_crate(crate: Crate) -> str:
    """Serialise *crate* to JSON text."""
    return json.dumps(crate_to_document(crate))


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _require_string(fields: dict[str, Any], key: str) -> str:
    value = fields.get(key.lower())
    if not isinstance(value, str):
        raise DecodeError(f"Crate document field {key!r} must be a string.")
    return value


def _require_name(fields: dict[str, Any], key: str) -> str:
    value = _require_string(fields, key)
    if not is_safe_component(value):
        raise DecodeError(
            f"Crate document field {key!r} is not a valid file name: {value!r}",
        )
    return value


def _decode_payload(raw: object) -> bytes:
    if raw is None:
        return b""
    if not isinstance(raw, str):
        raise DecodeError(
            f"Crate document field {BINARY_FILE_KEY!r} must be base64 text.",
        )
    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        raise DecodeError(
            f"Crate document field {BINARY_FILE_KEY!r} is not valid base64: {exc}",
        ) from exc


def document_to_crate(document: object) -> Crate:
    """Build a :class:`Crate` from an already-parsed JSON value.

    Raises
    ------
    DecodeError
        If *document* is not an object or any field is malformed.
    """
    if not isinstance(document, dict):
        raise DecodeError("Crate document must be a JSON object.")

    fields = {str(key).lower(): value for key, value in document.items()}

    source_url = fields.get(SOURCE_URL_KEY.lower())
    if source_url is None:
        source_url = ""
    elif not isinstance(source_url, str):
        raise DecodeError(f"Crate document field {SOURCE_URL_KEY!r} must be a string.")

    return Crate(
        # Only the binary name becomes a path on load; the project name is
        # checked when it is turned into a crate file name.
        project_name=_require_string(fields, PROJECT_NAME_KEY),
        binary_name=_require_name(fields, BINARY_NAME_KEY),
        binary_payload=_decode_payload(fields.get(BINARY_FILE_KEY.lower())),
        source_url=source_url,
    )


def decode_crate(data: str | bytes) -> Crate:
    """Parse JSON *data* into a :class:`Crate`.

    Raises
    ------
    DecodeError
        If *data* is not valid JSON or not a valid crate document.
    """
    try:
        document = json.loads(data)
    except ValueError as exc:
        # Covers JSONDecodeError and UnicodeDecodeError on bytes input.
        raise DecodeError(f"Crate document is not valid JSON: {exc}") from exc
    return document_to_crate(document)

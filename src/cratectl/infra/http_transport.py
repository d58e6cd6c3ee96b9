"""requests-backed implementation of :class:`~cratectl.core.protocols.Transport`.

This module is the **only** place in the codebase that imports
``requests``.  All ``requests`` exceptions are caught here and re-raised
as :class:`~cratectl.exceptions.TransportError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from cratectl.core.models import TransportResponse
from cratectl.exceptions import EnvironmentError, TransportError
from cratectl.utils.constants import DEFAULT_PULL_TIMEOUT, DOWNLOAD_CHUNK_SIZE, USER_AGENT

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int | None], None]


def _import_requests() -> Any:
    """Import requests lazily so ``--help`` works without it."""
    try:
        import requests
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "requests is not installed. Install with: pip install requests",
        ) from exc
    return requests


class RequestsTransport:
    """Concrete :class:`Transport` backed by ``requests``.

    Parameters
    ----------
    timeout:
        Seconds allowed for connecting and for each read.
    progress_callback:
        Optional callable invoked as ``callback(downloaded, total)``
        after each body chunk.  *total* is ``None`` when the server
        sends no ``Content-Length``.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_PULL_TIMEOUT,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self._timeout: float = timeout
        self._progress_callback: ProgressCallback | None = progress_callback

    def get(self, url: str) -> TransportResponse:
        """GET *url* and return status plus the full body.

        Raises
        ------
        TransportError
            For connection failures, timeouts and interrupted bodies.
        """
        requests = _import_requests()

        logger.debug("GET %s (timeout=%ss)", url, self._timeout)
        try:
            with requests.get(
                url,
                timeout=self._timeout,
                stream=True,
                headers={"User-Agent": USER_AGENT},
            ) as response:
                body = self._read_body(response)
                status_code = int(response.status_code)
                final_url = str(response.url or url)
        except requests.RequestException as exc:
            raise TransportError(
                f"Error pulling crate from {url}: {exc}",
                hint="Check the URL and your network connection.",
            ) from exc

        logger.debug("GET %s -> %d (%d bytes)", final_url, status_code, len(body))
        return TransportResponse(status_code=status_code, body=body, url=final_url)

    def _read_body(self, response: Any) -> bytes:
        total = _content_length(response.headers)
        chunks: list[bytes] = []
        downloaded = 0
        for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
            if not chunk:
                continue
            chunks.append(chunk)
            downloaded += len(chunk)
            if self._progress_callback is not None:
                self._progress_callback(downloaded, total)
        return b"".join(chunks)


def _content_length(headers: Any) -> int | None:
    """Return ``Content-Length`` as an ``int``, or ``None``."""
    raw = headers.get("Content-Length") if headers is not None else None
    if raw is None:
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None

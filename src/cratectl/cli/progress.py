"""Rich transfer progress for ``cratectl pull``.

:class:`TransferProgress` is handed to
:class:`~cratectl.infra.http_transport.RequestsTransport` as its
progress callback.  The transport only reports byte counts; all
rendering happens here.
"""

from __future__ import annotations

from typing import Any

from cratectl.cli.console import escape, get_rich_console
from cratectl.exceptions import EnvironmentError


class TransferProgress:
    """Callable ``(downloaded, total)`` adapter for a Rich progress bar.

    Usage::

        with TransferProgress("tool.json") as progress:
            transport = RequestsTransport(progress_callback=progress)
            manager.pull(url)
    """

    def __init__(self, description: str = "Downloading") -> None:
        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                TextColumn,
                TransferSpeedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=get_rich_console(),
            transient=True,
        )
        self._description: str = escape(_shorten(description))
        self._task_id: Any = None
        self._started: bool = False

    def __enter__(self) -> TransferProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def start(self) -> None:
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the display.  Safe to call more than once."""
        if self._started:
            self._progress.stop()
            self._started = False

    def __call__(self, downloaded: int, total: int | None) -> None:
        if not self._started:
            return
        if self._task_id is None:
            self._task_id = self._progress.add_task(self._description, total=total)
        if total is not None:
            self._progress.update(self._task_id, total=total, completed=downloaded)
        else:
            self._progress.update(self._task_id, completed=downloaded)


def _shorten(text: str, limit: int = 50) -> str:
    """Keep the last path segment of *text*, capped at *limit* characters."""
    name = text.rstrip("/").rsplit("/", 1)[-1] or text
    if len(name) > limit:
        return name[: limit - 3] + "..."
    return name

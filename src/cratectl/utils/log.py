"""Logging setup for the cratectl process.

Library modules only ever call ``logging.getLogger(__name__)``; the CLI
calls :func:`configure_logging` once at start-up.  Rich is imported
lazily so that logging still works when it is not installed.
"""

from __future__ import annotations

import logging

_LOGGER_NAME = "cratectl"


def _build_handler() -> logging.Handler:
    """Return a Rich handler on stderr, or a plain stream handler."""
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s"),
        )
        return handler

    return RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``cratectl`` logger hierarchy.

    Calling this more than once only adjusts the level; handlers are
    never duplicated.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not getattr(logger, "_cratectl_configured", False):
        logger.addHandler(_build_handler())
        logger.propagate = False
        logger._cratectl_configured = True  # type: ignore[attr-defined]

    return logger

"""Loguru helpers for consistent stderr logging in CLI commands."""

from __future__ import annotations

import sys

from loguru import logger

_SINK_IDS: dict[str, int] = {}


def configure_cli_logging(verbose: bool = False) -> int:
    """Replace loguru's default handler with one stderr sink (DEBUG when verbose, else WARNING)."""
    previous = _SINK_IDS.pop("stderr", None)
    if previous is None:
        logger.remove()
    else:
        logger.remove(previous)
    sink_id = logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> {message}",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS["stderr"] = sink_id
    return sink_id

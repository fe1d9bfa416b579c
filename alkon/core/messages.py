"""Console messaging helpers.

Every user-facing status line goes through the ``alkon`` logger and is
rendered as a single line with a severity tag, e.g. ``[Warn] No repo
selected.``. Tables and usage text are printed to stdout separately.
"""
from __future__ import annotations
import logging
import sys
from typing import IO, Optional

log = logging.getLogger("alkon")


class TagFormatter(logging.Formatter):
    """Format records as ``[Tag] message``."""

    TAGS = {
        logging.DEBUG: "Debug",
        logging.INFO: "Info",
        logging.WARNING: "Warn",
        logging.ERROR: "Fail",
        logging.CRITICAL: "Fail",
    }

    def format(self, record: logging.LogRecord) -> str:
        tag = self.TAGS.get(record.levelno, record.levelname.title())
        return f"[{tag}] {record.getMessage()}"


def setup_logging(verbose: bool = False, stream: Optional[IO[str]] = None) -> None:
    """Attach a single tagged stderr handler to the ``alkon`` logger.

    Calling it again replaces the previous handler rather than stacking.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(TagFormatter())
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.INFO)


def debug(msg: str) -> None:
    log.debug(msg)


def info(msg: str) -> None:
    log.info(msg)


def warn(msg: str) -> None:
    log.warning(msg)


def fail(msg: str) -> None:
    log.error(msg)

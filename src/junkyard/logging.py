"""Logging configuration for junkyard."""

import logging
import sys
from pathlib import Path
from typing import Optional

import platformdirs

LOG_FILENAME = "debug.log"

FILE_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
STDERR_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _file_handler(log_dir: Optional[Path]) -> logging.Handler:
    """File handler for the debug log, or a NullHandler if it can't be opened."""
    try:
        if log_dir is None:
            log_dir = Path(platformdirs.user_config_dir("junkyard", ensure_exists=True))
        else:
            log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8")
    except OSError:
        # Unwritable log dir (common in sandboxed tests)
        return logging.NullHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False) -> None:
    """Configure the ``junkyard`` logger.

    Everything at DEBUG goes to ``debug.log`` in the user config directory
    (or ``log_dir``). With ``verbose``, INFO and above are also echoed to
    stderr, which shows storage discards and registration outcomes while
    Rich keeps stdout for command output.

    Safe to call more than once; each handler is added at most once.
    """
    logger = logging.getLogger("junkyard")
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        handler = _file_handler(log_dir)
        logger.addHandler(handler)
        if isinstance(handler, logging.FileHandler):
            logger.debug("Logging initialized → %s", handler.baseFilename)

    has_stderr = any(
        getattr(h, "name", None) == "junkyard-stderr" for h in logger.handlers
    )
    if verbose and not has_stderr:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.set_name("junkyard-stderr")
        stderr_handler.setLevel(logging.INFO)
        stderr_handler.setFormatter(logging.Formatter(STDERR_FORMAT))
        logger.addHandler(stderr_handler)

"""Optional debug log file for a mocked invocation.

Attaches a DEBUG FileHandler to the ``mocked`` logger namespace so the
extraction, naming and synthesis traces can be inspected after a run.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

_HANDLER_NAME = "mocked_debug"


def configure_debug_logging(log_path: Path) -> Path | None:
    """Send DEBUG records of the ``mocked`` namespace to log_path.

    Best-effort: if the file cannot be opened the run continues without it.
    Set MOCKED_DISABLE_DEBUG_LOG=1 to disable debug logging entirely.

    Args:
        log_path: Destination file. Parent directories are created.

    Returns:
        The log path, or None if logging could not be configured or is
        disabled via environment variable.
    """
    if os.environ.get("MOCKED_DISABLE_DEBUG_LOG") == "1":
        return None

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
    except OSError:
        return None

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    handler.set_name(_HANDLER_NAME)

    package_logger = logging.getLogger("mocked")
    package_logger.setLevel(logging.DEBUG)
    cleanup_debug_logging()
    package_logger.addHandler(handler)
    return log_path


def cleanup_debug_logging() -> bool:
    """Detach and close the debug handler.

    Returns:
        True if a handler was removed.
    """
    package_logger = logging.getLogger("mocked")
    removed = False
    for existing in package_logger.handlers[:]:
        if getattr(existing, "name", "") == _HANDLER_NAME:
            existing.close()
            package_logger.removeHandler(existing)
            removed = True
    return removed

"""Console logging helpers for mocked.

Colored, timestamped status lines. Everything goes to stderr by default so
generated source written to stdout stays clean.
"""

import sys
from datetime import datetime
from typing import TextIO


# Global verbose setting (can be modified at runtime)
_verbose_enabled: bool = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose output globally."""
    global _verbose_enabled
    _verbose_enabled = enabled


def is_verbose_enabled() -> bool:
    """Check if verbose output is currently enabled."""
    return _verbose_enabled


class Colors:
    """ANSI color codes for terminal output (bright variants)."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    RED = "\033[91m"
    GRAY = "\033[90m"
    WHITE = "\033[97m"
    MUTED = "\033[90m"


# Severity -> color used for diagnostics
SEVERITY_COLORS = {
    "error": Colors.RED,
    "defect": Colors.MAGENTA,
    "warning": Colors.YELLOW,
}


def log(
    icon: str,
    message: str,
    color: str = Colors.RESET,
    dim: bool = False,
    file: TextIO | None = None,
) -> None:
    """Print a timestamped status line."""
    style = Colors.MUTED if dim else ""
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(
        f"{Colors.GRAY}{timestamp}{Colors.RESET} {style}{color}{icon} {message}{Colors.RESET}",
        file=file if file is not None else sys.stderr,
    )


def log_verbose(icon: str, message: str, color: str = Colors.MUTED) -> None:
    """Log only when verbose output is enabled."""
    if _verbose_enabled:
        log(icon, message, color, dim=True)

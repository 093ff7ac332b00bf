"""Diagnostic reporter implementations.

Provides concrete implementations of the DiagnosticReporter protocol:
- DiagnosticLog: thread-safe, append-only collector
- ConsoleDiagnosticSink: colored console output, optionally teeing into a log
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, TextIO

from .log_output.console import SEVERITY_COLORS, Colors, log

if TYPE_CHECKING:
    from mocked.core.models import Diagnostic

__all__ = [
    "ConsoleDiagnosticSink",
    "DiagnosticLog",
]


class DiagnosticLog:
    """Append-only collector safe to share between concurrent passes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Snapshot of the collected diagnostics."""
        with self._lock:
            return list(self._diagnostics)

    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def __len__(self) -> int:
        with self._lock:
            return len(self._diagnostics)


class ConsoleDiagnosticSink:
    """Prints each diagnostic as it arrives.

    Args:
        collector: Optional DiagnosticLog that also receives every report,
            so callers can compute an exit status afterwards.
        file: Stream to print to; stderr when None.
    """

    def __init__(
        self, collector: DiagnosticLog | None = None, file: TextIO | None = None
    ) -> None:
        self.collector = collector
        self.file = file
        self._lock = threading.Lock()

    def report(self, diagnostic: Diagnostic) -> None:
        color = SEVERITY_COLORS.get(diagnostic.severity, Colors.WHITE)
        with self._lock:
            log("✗", f"[{diagnostic.node_name}] {diagnostic.format()}", color, file=self.file)
        if self.collector is not None:
            self.collector.report(diagnostic)

"""Protocol definitions for the collaborators of the synthesis engine.

The engine itself only produces SynthesizedType values. Reporting failures
and turning the output model into target syntax are delegated to objects
satisfying these protocols, so the domain layer never imports infra code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import Diagnostic, SynthesizedType


@runtime_checkable
class DiagnosticReporter(Protocol):
    """Channel accepting structured failure reports.

    Implementations must tolerate concurrent calls from independent
    synthesis passes. No ordering is required between unrelated reports.
    """

    def report(self, diagnostic: Diagnostic) -> None:
        """Record a single diagnostic."""
        ...


@runtime_checkable
class MockRenderer(Protocol):
    """Turns a synthesized mock into concrete target syntax."""

    def render(self, synthesized: SynthesizedType) -> str:
        """Return the source text of the mock type."""
        ...

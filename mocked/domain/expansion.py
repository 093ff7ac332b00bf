"""Expansion entry point: one directive-annotated declaration in, mocks out.

MockExpander wires the synthesis steps together and owns the reporting
contract: user errors and slot collisions become a single Diagnostic and
zero artifacts. Missing type annotations are engine defects and propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mocked.core.models import Diagnostic, SynthesisOptions
from mocked.domain.directive import (
    DEFAULT_DIRECTIVE_NAME,
    Directive,
    directive_visibility_token,
    find_directive,
)
from mocked.domain.errors import OverrideSlotCollisionError, SynthesisError
from mocked.domain.extraction import extract_interface, source_location
from mocked.domain.synthesizer import synthesize
from mocked.domain.visibility import resolve_visibility

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from mocked.core.models import SynthesizedType
    from mocked.core.protocols import DiagnosticReporter

logger = logging.getLogger(__name__)


@dataclass
class ExpansionResult:
    """Outcome of expanding one annotated declaration.

    Attributes:
        node: The raw declaration node.
        artifacts: Zero or one synthesized mocks.
        diagnostics: Reports produced while expanding this node.
    """

    node: Mapping[str, Any]
    artifacts: list[SynthesizedType] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return bool(self.artifacts)


class MockExpander:
    """Expands directive-annotated declarations into mocks.

    Example:
        expander = MockExpander(reporter=DiagnosticLog())
        for result in expander.expand_source(nodes):
            for mock in result.artifacts:
                print(SwiftRenderer().render(mock))
    """

    def __init__(
        self,
        reporter: DiagnosticReporter,
        options: SynthesisOptions | None = None,
        directive_name: str = DEFAULT_DIRECTIVE_NAME,
    ) -> None:
        self.reporter = reporter
        self.options = options or SynthesisOptions()
        self.directive_name = directive_name

    def expand(
        self, node: Mapping[str, Any], directive: Directive | None = None
    ) -> list[SynthesizedType]:
        """Expand one declaration.

        Args:
            node: Raw declaration node.
            directive: The directive attached to the node. When omitted the
                node's own attributes are searched, and a bare directive is
                assumed if none is found.

        Returns:
            A single-element list on success, an empty list when a
            diagnostic was reported.
        """
        return self._expand(node, directive).artifacts

    def expand_source(
        self, nodes: Iterable[Mapping[str, Any]]
    ) -> list[ExpansionResult]:
        """Expand every node carrying the directive, in input order."""
        results: list[ExpansionResult] = []
        for node in nodes:
            directive = find_directive(node, self.directive_name)
            if directive is None:
                logger.debug("No @%s on %s", self.directive_name, node.get("name"))
                continue
            results.append(self._expand(node, directive))
        return results

    def _expand(
        self, node: Mapping[str, Any], directive: Directive | None
    ) -> ExpansionResult:
        result = ExpansionResult(node=node)
        if directive is None:
            directive = find_directive(node, self.directive_name) or Directive(
                name=self.directive_name
            )
        try:
            interface = extract_interface(node, self.options)
            visibility = resolve_visibility(directive_visibility_token(directive))
            result.artifacts.append(synthesize(interface, visibility, self.options))
        except SynthesisError as e:
            result.diagnostics.append(self._report(node, str(e), "error"))
        except OverrideSlotCollisionError as e:
            result.diagnostics.append(self._report(node, str(e), "defect"))
        return result

    def _report(
        self, node: Mapping[str, Any], message: str, severity: str
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            source_node=node,
            message=message,
            severity=severity,
            location=source_location(node),
        )
        logger.debug("Reporting %s for %s: %s", severity, node.get("name"), message)
        self.reporter.report(diagnostic)
        return diagnostic

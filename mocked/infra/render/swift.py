"""Swift source renderer for synthesized mocks.

Turns a SynthesizedType into the peer declaration placed next to the
annotated protocol. The layout follows the macro output the mocks are
consumed as:

    /// Mocked version of Greeter
    internal struct MockedGreeter: Greeter {
        // MARK: - MockedGreeter Variables
        ...
        // MARK: - MockedGreeter Function Overrides
        ...
        // MARK: - MockedGreeter init
        ...
        // MARK: - MockedGreeter Functions
        ...
    }

Sections with nothing to declare are left out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mocked.core.models import MethodImplementation, SynthesizedType

INDENT = "    "


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def effect_specifiers(is_async: bool, can_fail: bool) -> str:
    """Effects as written after a parameter clause, with trailing space."""
    words = [w for w, on in (("async", is_async), ("throws", can_fail)) if on]
    return " ".join(words) + " " if words else ""


def call_prefix(is_async: bool, can_fail: bool) -> str:
    """Keywords placed before a call to an effectful closure."""
    words = [w for w, on in (("try", can_fail), ("await", is_async)) if on]
    return " ".join(words) + " " if words else ""


class SwiftRenderer:
    """Renders mocks as Swift source text. Satisfies MockRenderer."""

    def __init__(self, indent: str = INDENT) -> None:
        self.indent = indent

    def render(self, synthesized: SynthesizedType) -> str:
        sections = [
            ("Variables", self._fields(synthesized)),
            ("Function Overrides", self._override_fields(synthesized)),
            ("init", self._initializer(synthesized)),
            ("Functions", self._methods(synthesized)),
        ]
        body: list[str] = []
        for title, lines in sections:
            if not lines:
                continue
            if body:
                body.append("")
            body.append(f"// MARK: - {synthesized.name} {title}")
            body.append("")
            body.extend(lines)

        lines = [
            f"/// Mocked version of {synthesized.interface_name}",
            f"{self._header(synthesized)} {{",
            *(self._indented(line) for line in body),
            "}",
        ]
        return "\n".join(lines) + "\n"

    def _indented(self, line: str, depth: int = 1) -> str:
        return f"{self.indent * depth}{line}" if line else ""

    def _header(self, synthesized: SynthesizedType) -> str:
        keyword = "class" if synthesized.is_reference else "struct"
        generics = ""
        if synthesized.generic_parameters:
            generics = "<{}>".format(
                ", ".join(g.declaration for g in synthesized.generic_parameters)
            )
        return (
            f"{synthesized.visibility.value} {keyword} "
            f"{synthesized.name}{generics}: {synthesized.interface_name}"
        )

    def _fields(self, synthesized: SynthesizedType) -> list[str]:
        return [
            f"{f.visibility.value} {'var' if f.mutable else 'let'} {f.name}: {f.type}"
            for f in synthesized.fields
        ]

    def _override_fields(self, synthesized: SynthesizedType) -> list[str]:
        return [
            f"{slot.visibility.value} let {slot.field_name}: {slot.signature}"
            for slot in synthesized.override_slots
        ]

    def _initializer(self, synthesized: SynthesizedType) -> list[str]:
        initializer = synthesized.initializer
        head = f"{initializer.visibility.value} init("
        if not initializer.parameters:
            return [f"{head}) {{}}"]

        lines = [head]
        for index, parameter in enumerate(initializer.parameters):
            default = " = nil" if parameter.optional else ""
            comma = "," if index < len(initializer.parameters) - 1 else ""
            lines.append(
                self._indented(f"{parameter.name}: {parameter.type}{default}{comma}")
            )
        lines.append(") {")
        lines.extend(
            self._indented(f"self.{target} = {source}")
            for target, source in initializer.assignments
        )
        lines.append("}")
        return lines

    def _methods(self, synthesized: SynthesizedType) -> list[str]:
        lines: list[str] = []
        for implementation in synthesized.methods:
            if lines:
                lines.append("")
            lines.extend(self._method(implementation))
        return lines

    def _method(self, implementation: MethodImplementation) -> list[str]:
        method = implementation.method
        field = implementation.slot.field_name
        effects = effect_specifiers(method.is_async, method.can_fail)
        prefix = call_prefix(method.is_async, method.can_fail)
        head = f"{implementation.visibility.value} func {method.name}("

        if method.parameters:
            lines = [head]
            lines.extend(
                self._indented(
                    p.declaration + ("," if i < len(method.parameters) - 1 else "")
                )
                for i, p in enumerate(method.parameters)
            )
            lines.append(f") {effects}-> {method.return_type} {{")
        else:
            lines = [f"{head}) {effects}-> {method.return_type} {{"]

        lines.extend(
            [
                self._indented(f"guard let {field} else {{"),
                self._indented(
                    f'fatalError("{_escape(implementation.fallback_message)}")', 2
                ),
                self._indented("}"),
                "",
            ]
        )
        if implementation.forwarded_arguments:
            lines.append(self._indented(f"return {prefix}{field}("))
            lines.extend(
                self._indented(
                    argument
                    + ("," if i < len(implementation.forwarded_arguments) - 1 else ""),
                    2,
                )
                for i, argument in enumerate(implementation.forwarded_arguments)
            )
            lines.append(self._indented(")"))
        else:
            lines.append(self._indented(f"return {prefix}{field}()"))
        lines.append("}")
        return lines

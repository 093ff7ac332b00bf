"""In-memory fakes and raw-declaration builders for testing.

Fakes implement the real collaborator protocols, so interface mismatches
show up at test time. The builders produce the same mapping trees the host
parser hands to the engine, keeping individual tests short.

Available helpers:
- FakeDiagnosticReporter: records diagnostics, satisfies DiagnosticReporter
- protocol_node / var / func / param / assoc: raw node builders
- some_parameter_node / example_protocol_node / custom_protocol_node: samples

Usage:
    from tests.fakes import FakeDiagnosticReporter, func, protocol_node

    node = protocol_node("Greeter", members=[func("greet")])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mocked.core.models import Diagnostic


class FakeDiagnosticReporter:
    """Captures every reported diagnostic in order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]


def param(name: str, type: str, label: str | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"name": name, "type": type}
    if label is not None:
        node["label"] = label
    return node


def var(name: str, type: str | None, *, settable: bool = True) -> dict[str, Any]:
    node: dict[str, Any] = {
        "kind": "variable",
        "name": name,
        "accessors": ["get", "set"] if settable else ["get"],
    }
    if type is not None:
        node["type"] = type
    return node


def func(
    name: str,
    *parameters: dict[str, Any],
    returns: str | None = None,
    is_async: bool = False,
    throws: bool = False,
) -> dict[str, Any]:
    node: dict[str, Any] = {
        "kind": "function",
        "name": name,
        "parameters": list(parameters),
    }
    if returns is not None:
        node["returns"] = returns
    if is_async:
        node["async"] = True
    if throws:
        node["throws"] = True
    return node


def assoc(name: str, constraint: str | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"kind": "associatedtype", "name": name}
    if constraint is not None:
        node["constraint"] = constraint
    return node


def protocol_node(
    name: str,
    *,
    inherits: list[str] | None = None,
    members: list[dict[str, Any]] | None = None,
    visibility: str | None = None,
    kind: str = "protocol",
) -> dict[str, Any]:
    """A raw declaration node annotated with @Mocked."""
    directive: dict[str, Any] = {"name": "Mocked"}
    if visibility is not None:
        directive["arguments"] = [visibility]
    return {
        "kind": kind,
        "name": name,
        "attributes": [directive],
        "inherits": inherits or [],
        "members": members or [],
    }


def some_parameter_node(visibility: str | None = None) -> dict[str, Any]:
    """Concurrency-safe protocol with overloads of every flavor."""
    return protocol_node(
        "SomeParameter",
        inherits=["Sendable"],
        visibility=visibility,
        members=[
            var("title", "String"),
            var("description", "String", settable=False),
            func("someMethod"),
            func("someMethod", param("parameter", "Int")),
            func("someMethod", param("parameter", "Int", label="with")),
            func("someOtherMethod", returns="String", throws=True),
            func("someOtherMethod", returns="String", is_async=True, throws=True),
            func("someAsyncMethod", returns="String", is_async=True),
            func("someOptionalMethod", returns="String?"),
        ],
    )


def example_protocol_node() -> dict[str, Any]:
    """Protocol with associated types, public visibility."""
    return protocol_node(
        "ExampleProtocol",
        inherits=["Sendable"],
        visibility=".public",
        members=[
            assoc("ItemType"),
            assoc("ItemValue", "Codable"),
            assoc("ItemKey", "Hashable"),
            var("name", "String"),
            var("count", "Int", settable=False),
            var("isEnabled", "Bool"),
            func(
                "fetchItem",
                param("id", "Int", label="withID"),
                returns="ItemType",
                is_async=True,
                throws=True,
            ),
            func("saveItem", param("item", "ItemType", label="_"), returns="Bool", throws=True),
            func("processAllItems", is_async=True),
            func("reset"),
            func("optionalItem", returns="ItemType?"),
        ],
    )


def custom_protocol_node() -> dict[str, Any]:
    """Reference-semantics protocol."""
    return protocol_node(
        "CustomProtocol",
        inherits=["DefaultProtocol", "AnyObject"],
        visibility=".open",
        members=[func("customMethod", returns="Bool")],
    )

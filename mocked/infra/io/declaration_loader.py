"""Loader for raw declaration trees.

The host parser's output is exchanged as YAML or JSON (JSON being a YAML
subset, both go through yaml.safe_load). A document is either a single
declaration mapping, a list of declarations, or a mapping with a
``declarations`` list:

    declarations:
      - kind: protocol
        name: SomeParameter
        attributes: [{name: Mocked, arguments: [".public"]}]
        inherits: [Sendable]
        members:
          - {kind: variable, name: title, type: String, accessors: [get, set]}
          - kind: function
            name: someMethod
            parameters: [{label: with, name: parameter, type: Int}]

Key functions:
- load_declarations: Read and validate a declaration file
- parse_declarations: Parse declaration text
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from mocked.domain.errors import DeclarationLoadError

if TYPE_CHECKING:
    from pathlib import Path

_MEMBER_NAMED_KINDS = frozenset({"variable", "function", "associatedtype"})


def load_declarations(path: Path) -> list[dict[str, Any]]:
    """Load every declaration node from a file.

    Raises:
        DeclarationLoadError: If the file is missing, unreadable, has
            invalid syntax, or does not describe declarations.
    """
    if not path.exists():
        raise DeclarationLoadError(f"Declaration file not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DeclarationLoadError(f"Failed to read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DeclarationLoadError(f"Failed to decode {path}: {e}") from e
    return parse_declarations(content, source=str(path))


def parse_declarations(content: str, source: str = "<string>") -> list[dict[str, Any]]:
    """Parse declaration text into a list of raw nodes.

    Nodes without a location block get one pointing at `source`, so
    diagnostics always name the file they came from.

    Raises:
        DeclarationLoadError: If the text is not valid YAML or has the
            wrong shape.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DeclarationLoadError(f"Invalid syntax in {source}: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict) and "declarations" in data:
        data = data["declarations"]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise DeclarationLoadError(
            f"{source} must contain a declaration mapping or list, "
            f"got {type(data).__name__}"
        )

    nodes: list[dict[str, Any]] = []
    for index, node in enumerate(data):
        _validate_node(node, f"{source}: declarations[{index}]")
        node.setdefault("location", {"file": source})
        nodes.append(node)
    return nodes


def _validate_node(node: object, where: str) -> None:
    """Check the structural shape the extraction step relies on.

    Only shape is checked here; semantic problems (wrong kind, bad
    visibility) are reported as diagnostics during expansion.
    """
    if not isinstance(node, dict):
        raise DeclarationLoadError(
            f"{where} must be a mapping, got {type(node).__name__}"
        )
    if not isinstance(node.get("name"), str) or not node["name"]:
        raise DeclarationLoadError(f"{where} must have a 'name' string")

    for field in ("inherits", "attributes", "members"):
        if field in node and node[field] is not None and not isinstance(node[field], list):
            raise DeclarationLoadError(f"{where}.{field} must be a list")

    for member_index, member in enumerate(node.get("members") or ()):
        member_where = f"{where}.members[{member_index}]"
        if not isinstance(member, dict):
            raise DeclarationLoadError(f"{member_where} must be a mapping")
        if member.get("kind") in _MEMBER_NAMED_KINDS and not isinstance(
            member.get("name"), str
        ):
            raise DeclarationLoadError(f"{member_where} must have a 'name' string")
        for type_field in ("type", "returns", "constraint"):
            value = member.get(type_field)
            if value is not None and not isinstance(value, str):
                # Unquoted YAML like [Int] parses as a list
                raise DeclarationLoadError(
                    f"{member_where}.{type_field} must be a string; "
                    "quote type expressions such as '[Int]'"
                )
        for flag in ("async", "throws"):
            value = member.get(flag)
            if value is not None and not isinstance(value, bool):
                raise DeclarationLoadError(f"{member_where}.{flag} must be true or false")
        parameters = member.get("parameters")
        if parameters is None:
            continue
        if not isinstance(parameters, list):
            raise DeclarationLoadError(f"{member_where}.parameters must be a list")
        for param_index, parameter in enumerate(parameters):
            if not isinstance(parameter, dict) or not all(
                isinstance(parameter.get(key), str) for key in ("name", "type")
            ):
                raise DeclarationLoadError(
                    f"{member_where}.parameters[{param_index}] must have "
                    "'name' and 'type' strings"
                )

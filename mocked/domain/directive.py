"""The annotation directive that requests a mock for a declaration.

Raw nodes carry their attributes as a list of mappings:

    attributes:
      - name: Mocked
        arguments: [".public"]

The directive accepts at most one positional argument, the visibility token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mocked.domain.errors import MalformedDirectiveError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_DIRECTIVE_NAME = "Mocked"


@dataclass(frozen=True)
class Directive:
    name: str
    arguments: tuple[Any, ...] = ()


def find_directive(
    node: Mapping[str, Any], name: str = DEFAULT_DIRECTIVE_NAME
) -> Directive | None:
    """Return the directive named `name` attached to the node, if any.

    Attribute names may be written with or without a leading ``@``.
    """
    for attribute in node.get("attributes") or ():
        if isinstance(attribute, str):
            attribute_name, arguments = attribute, ()
        elif isinstance(attribute, dict):
            attribute_name = str(attribute.get("name", ""))
            raw_arguments = attribute.get("arguments")
            if raw_arguments is None:
                arguments = ()
            elif isinstance(raw_arguments, list):
                arguments = tuple(raw_arguments)
            else:
                arguments = (raw_arguments,)
        else:
            continue
        if attribute_name.lstrip("@") == name:
            return Directive(name=name, arguments=arguments)
    return None


def directive_visibility_token(directive: Directive) -> str | None:
    """Return the single positional visibility token, or None when absent.

    Raises:
        MalformedDirectiveError: If there are several arguments, or the
            argument is labeled or not a string.
    """
    if not directive.arguments:
        return None
    if len(directive.arguments) > 1:
        raise MalformedDirectiveError(
            directive.name,
            f"expected at most one argument, got {len(directive.arguments)}",
        )
    argument = directive.arguments[0]
    if isinstance(argument, dict):
        raise MalformedDirectiveError(
            directive.name, "the visibility argument must be positional"
        )
    if not isinstance(argument, str):
        raise MalformedDirectiveError(
            directive.name,
            f"the visibility argument must be a token, got {type(argument).__name__}",
        )
    return argument

"""Extraction of the normalized interface model from a raw declaration.

The host parser hands over each declaration as a mapping tree (see
declaration_loader). This module walks that tree once and classifies every
member by its node kind:

- variable: property requirement (type annotation mandatory)
- function: method requirement
- associatedtype: associated type slot

Other member kinds (nested types, initializers, subscripts...) are not
relevant to mocking and are skipped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mocked.core.models import (
    VOID_TYPE,
    AssociatedTypeSlot,
    InterfaceDeclaration,
    MethodMember,
    Parameter,
    PropertyMember,
    SourceLocation,
    SynthesisOptions,
)
from mocked.domain.errors import MissingTypeAnnotationError, NotAnInterfaceError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

INTERFACE_KIND = "protocol"


def extract_interface(
    node: Mapping[str, Any], options: SynthesisOptions | None = None
) -> InterfaceDeclaration:
    """Build an InterfaceDeclaration from a raw declaration node.

    Args:
        node: Raw declaration mapping supplied by the host parser.
        options: Marker names; defaults to SynthesisOptions().

    Returns:
        The normalized, immutable interface model.

    Raises:
        NotAnInterfaceError: If the node is not a protocol declaration.
        MissingTypeAnnotationError: If a property has no declared type.
    """
    options = options or SynthesisOptions()
    name = str(node.get("name", ""))
    kind = node.get("kind")
    if kind != INTERFACE_KIND:
        raise NotAnInterfaceError(name, str(kind) if kind else None)

    markers = tuple(_text(marker) for marker in node.get("inherits") or ())
    concurrency_safe = options.concurrency_marker in markers

    properties: list[PropertyMember] = []
    methods: list[MethodMember] = []
    associated_types: list[AssociatedTypeSlot] = []

    for member in node.get("members") or ():
        member_kind = member.get("kind")
        if member_kind == "variable":
            properties.append(_property(name, member))
        elif member_kind == "function":
            methods.append(_method(member, concurrency_safe))
        elif member_kind == "associatedtype":
            associated_types.append(
                AssociatedTypeSlot(
                    name=_text(member["name"]),
                    constraint=_text(member.get("constraint") or ""),
                )
            )
        else:
            logger.debug(
                "Skipping %s member %r of %s",
                member_kind,
                member.get("name"),
                name,
            )

    interface = InterfaceDeclaration(
        name=name,
        inherited_markers=markers,
        properties=tuple(properties),
        methods=tuple(methods),
        associated_types=tuple(associated_types),
        location=source_location(node),
    )
    logger.debug(
        "Extracted %s: %d properties, %d methods, %d associated types",
        name,
        len(interface.properties),
        len(interface.methods),
        len(interface.associated_types),
    )
    return interface


def source_location(node: Mapping[str, Any]) -> SourceLocation | None:
    """Read the optional location block of a raw node."""
    location = node.get("location")
    if not isinstance(location, dict):
        return None
    return SourceLocation(
        file=location.get("file"),
        line=location.get("line"),
        column=location.get("column"),
    )


def _text(value: object) -> str:
    # Type expressions arrive with the parser's trivia attached
    return str(value).strip()


def _property(interface: str, member: Mapping[str, Any]) -> PropertyMember:
    name = _text(member["name"])
    declared_type = member.get("type")
    if declared_type is None or not _text(declared_type):
        raise MissingTypeAnnotationError(interface, name)

    accessors = member.get("accessors")
    # A bare stored requirement behaves like { get set }
    mutable = accessors is None or "set" in accessors
    return PropertyMember(name=name, type=_text(declared_type), mutable=mutable)


def _method(member: Mapping[str, Any], concurrency_safe: bool) -> MethodMember:
    name = _text(member["name"])
    if member.get("generic_parameters"):
        logger.warning(
            "Generic parameters of method %s are not supported and were ignored",
            name,
        )

    parameters = tuple(
        Parameter(
            label=_text(raw["label"]) if raw.get("label") is not None else None,
            name=_text(raw["name"]),
            type=_text(raw["type"]),
        )
        for raw in member.get("parameters") or ()
    )
    return_type = member.get("returns")
    return MethodMember(
        name=name,
        parameters=parameters,
        return_type=_text(return_type) if return_type else VOID_TYPE,
        is_async=bool(member.get("async", False)),
        can_fail=bool(member.get("throws", False)),
        concurrency_safe=concurrency_safe,
    )

"""Mock synthesis: assembles a SynthesizedType from an interface model.

The synthesizer is a pure function of its inputs. It holds no state between
declarations, so independent interfaces may be synthesized concurrently.
A pass either returns one complete SynthesizedType or raises; nothing is
emitted partially.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mocked.core.models import (
    MOCK_TYPE_PREFIX,
    GenericParameter,
    Initializer,
    InitializerParameter,
    MethodImplementation,
    OverrideSlot,
    StoredField,
    SynthesisOptions,
    SynthesizedType,
)
from mocked.domain.container import select_container_kind
from mocked.domain.naming import disambiguate
from mocked.domain.visibility import (
    DEFAULT_VISIBILITY,
    OVERRIDE_SLOT_VISIBILITY,
    member_visibility,
)

if TYPE_CHECKING:
    from mocked.core.models import InterfaceDeclaration
    from mocked.domain.visibility import VisibilityTier

logger = logging.getLogger(__name__)


def mock_type_name(interface_name: str) -> str:
    return f"{MOCK_TYPE_PREFIX}{interface_name}"


def fallback_message(slot_id: str, signature: str) -> str:
    """Message emitted when a method is called without its override.

    Example:
        >>> fallback_message("greet", "(() -> Void)?")
        'Mocked greet: (() -> Void)? was not implemented!'
    """
    return f"{MOCK_TYPE_PREFIX} {slot_id}: {signature} was not implemented!"


def synthesize(
    interface: InterfaceDeclaration,
    visibility: VisibilityTier = DEFAULT_VISIBILITY,
    options: SynthesisOptions | None = None,
) -> SynthesizedType:
    """Build the mock for one interface.

    Args:
        interface: The normalized interface.
        visibility: Resolved visibility tier of the directive.
        options: Marker names; defaults to SynthesisOptions().

    Returns:
        The complete, immutable mock model.

    Raises:
        OverrideSlotCollisionError: If two methods cannot be given distinct slots.
    """
    options = options or SynthesisOptions()
    members = member_visibility(visibility)

    fields = tuple(
        StoredField(
            name=prop.name,
            type=prop.type,
            mutable=prop.mutable,
            visibility=members,
        )
        for prop in interface.properties
    )

    method_slots = disambiguate(interface.methods, interface.properties)
    override_slots = tuple(
        OverrideSlot(
            slot_id=named.slot_id,
            field_name=named.field_name,
            signature=named.signature,
            visibility=OVERRIDE_SLOT_VISIBILITY,
        )
        for named in method_slots
    )

    parameters = tuple(
        InitializerParameter(name=f.name, type=f.type) for f in fields
    ) + tuple(
        InitializerParameter(name=slot.slot_id, type=slot.signature, optional=True)
        for slot in override_slots
    )
    assignments = tuple((f.name, f.name) for f in fields) + tuple(
        (slot.field_name, slot.slot_id) for slot in override_slots
    )

    methods = tuple(
        MethodImplementation(
            method=named.method,
            slot=slot,
            visibility=members,
            fallback_message=fallback_message(slot.slot_id, slot.signature),
            forwarded_arguments=tuple(p.name for p in named.method.parameters),
        )
        for named, slot in zip(method_slots, override_slots, strict=True)
    )

    synthesized = SynthesizedType(
        name=mock_type_name(interface.name),
        interface_name=interface.name,
        container_kind=select_container_kind(
            interface.inherited_markers, options.reference_marker
        ),
        visibility=visibility,
        initializer=Initializer(
            visibility=visibility,
            parameters=parameters,
            assignments=assignments,
        ),
        generic_parameters=tuple(
            GenericParameter(name=slot.name, constraint=slot.constraint)
            for slot in interface.associated_types
        ),
        fields=fields,
        override_slots=override_slots,
        methods=methods,
    )
    logger.debug(
        "Synthesized %s (%s, %s) with %d fields and %d override slots",
        synthesized.name,
        synthesized.container_kind.value,
        visibility.value,
        len(fields),
        len(override_slots),
    )
    return synthesized

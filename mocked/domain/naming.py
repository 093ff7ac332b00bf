"""Override-slot naming and overload disambiguation.

Every method of an interface gets an override slot whose identifier is
unique within the generated type. The identifier is composed from:

1. the method name,
2. an effect suffix (AsyncThrows, Throws, Async or nothing),
3. each parameter's slot name with its first character upper-cased.

Most overloads are separated by that scheme alone. The ones it cannot
separate (types only, or a labeled versus an unlabeled parameter of the
same name) are qualified with their parameter and return types, as is a
method whose slot or field would reuse a property name. A collision that
survives qualification is an OverrideSlotCollisionError.

Disambiguation is scoped to one interface; there is no registry shared
between declarations.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mocked.domain.errors import OverrideSlotCollisionError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from mocked.core.models import MethodMember, PropertyMember

logger = logging.getLogger(__name__)

CONCURRENCY_SAFE_ATTRIBUTE = "@Sendable"

_NON_IDENTIFIER = re.compile(r"\W+")


@dataclass(frozen=True)
class MethodSlot:
    """Naming result for one method.

    Attributes:
        method: The method that owns the slot.
        slot_id: Unique override-slot identifier.
        field_name: Name of the stored closure field.
        signature: Nullable closure type string.
    """

    method: MethodMember
    slot_id: str
    field_name: str
    signature: str


def upper_first(text: str) -> str:
    """Upper-case the first character only; the rest is kept as written."""
    return text[:1].upper() + text[1:]


def effect_suffix(method: MethodMember) -> str:
    if method.is_async and method.can_fail:
        return "AsyncThrows"
    if method.can_fail:
        return "Throws"
    if method.is_async:
        return "Async"
    return ""


def base_slot_suffix(method: MethodMember) -> str:
    """Everything the slot identifier adds after the method name."""
    return effect_suffix(method) + "".join(
        upper_first(parameter.slot_name) for parameter in method.parameters
    )


def closure_signature(method: MethodMember) -> str:
    """Nullable closure type used for the override field and fallback message.

    Examples:
        ``(() -> Void)?`` for ``func greet()``;
        ``(@Sendable (_ withID: Int) async throws -> Item)?`` for a
        concurrency-safe ``func fetch(withID id: Int) async throws -> Item``.
    """
    marker = f"{CONCURRENCY_SAFE_ATTRIBUTE} " if method.concurrency_safe else ""
    parameters = ", ".join(
        f"_ {parameter.slot_name}: {parameter.type}"
        for parameter in method.parameters
    )
    effects = " ".join(
        word
        for word, enabled in (("async", method.is_async), ("throws", method.can_fail))
        if enabled
    )
    effects = f" {effects}" if effects else ""
    return f"({marker}({parameters}){effects} -> {method.return_type})?"


def _type_qualifier(method: MethodMember) -> str:
    # Unlabeled parameters are marked so f(value:) and f(_ value:) differ
    qualified = "".join(
        ("" if parameter.call_label else "Positional")
        + upper_first(_sanitize(parameter.type))
        for parameter in method.parameters
    )
    return f"{qualified}To{upper_first(_sanitize(method.return_type))}"


def _sanitize(type_expression: str) -> str:
    return _NON_IDENTIFIER.sub("", type_expression.replace("?", "Optional"))


def disambiguate(
    methods: Sequence[MethodMember],
    properties: Sequence[PropertyMember] = (),
) -> tuple[MethodSlot, ...]:
    """Assign an override slot to every method, in declaration order.

    Property names are taken before any slot is assigned: they are both
    initializer parameters and stored members of the mock. A method whose
    slot or field would reuse one is qualified with its types.

    Raises:
        OverrideSlotCollisionError: If two members cannot be told apart.
    """
    taken: dict[str, MethodMember | PropertyMember] = {p.name: p for p in properties}
    suffixes = [base_slot_suffix(method) for method in methods]

    groups: dict[str, list[int]] = defaultdict(list)
    for index, method in enumerate(methods):
        groups[method.name + suffixes[index]].append(index)

    for slot_id, indexes in groups.items():
        if len(indexes) < 2 and not _shadows_property(
            methods[indexes[0]], suffixes[indexes[0]], taken
        ):
            continue
        logger.debug(
            "Qualifying %d method(s) sharing slot %s with their types",
            len(indexes),
            slot_id,
        )
        for index in indexes:
            suffixes[index] += _type_qualifier(methods[index])

    owners = dict(taken)
    field_owners = dict(taken)
    slots: list[MethodSlot] = []
    for method, suffix in zip(methods, suffixes, strict=True):
        slot_id = method.name + suffix
        field_name = f"{method.name}Override{suffix}"
        if slot_id in owners:
            raise OverrideSlotCollisionError(slot_id, owners[slot_id], method)
        if field_name in field_owners:
            raise OverrideSlotCollisionError(
                field_name, field_owners[field_name], method
            )
        owners[slot_id] = method
        field_owners[field_name] = method
        slots.append(
            MethodSlot(
                method=method,
                slot_id=slot_id,
                field_name=field_name,
                signature=closure_signature(method),
            )
        )
        logger.debug("Method %s -> slot %s", method.display_signature, slot_id)
    return tuple(slots)


def _shadows_property(
    method: MethodMember, suffix: str, taken: Mapping[str, object]
) -> bool:
    return method.name + suffix in taken or f"{method.name}Override{suffix}" in taken

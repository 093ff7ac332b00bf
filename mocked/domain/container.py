"""Selection of record or reference semantics for the generated mock."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mocked.core.models import ContainerKind

if TYPE_CHECKING:
    from collections.abc import Iterable


def select_container_kind(
    markers: Iterable[str], reference_marker: str = "AnyObject"
) -> ContainerKind:
    """Return REFERENCE iff the inherited markers include the reference marker.

    Examples:
        >>> select_container_kind(["DefaultProtocol", "AnyObject"])
        <ContainerKind.REFERENCE: 'reference'>
        >>> select_container_kind(["Sendable"])
        <ContainerKind.RECORD: 'record'>
    """
    if any(marker.strip() == reference_marker for marker in markers):
        return ContainerKind.REFERENCE
    return ContainerKind.RECORD

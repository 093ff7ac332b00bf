"""Shared dataclasses for mocked.

This module provides the normalized interface model extracted from a raw
declaration and the synthesized mock model handed to renderers. Both sides
are frozen so a single synthesis pass cannot be mutated after the fact.

Types:
- SourceLocation: Optional file/line/column of a raw node
- Parameter: One method parameter (external label, binding name, type)
- PropertyMember / MethodMember / AssociatedTypeSlot: Interface members
- InterfaceDeclaration: The normalized interface
- ContainerKind: Record (value) or reference semantics for the mock
- SynthesisOptions: Marker names that drive synthesis
- StoredField / OverrideSlot / InitializerParameter / Initializer /
  MethodImplementation / GenericParameter: Pieces of the emitted type
- SynthesizedType: The complete emitted mock
- Diagnostic: A structured failure report
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mocked.domain.visibility import VisibilityTier

# Type used for methods that declare no return type
VOID_TYPE = "Void"

# Prefix of every generated mock type name
MOCK_TYPE_PREFIX = "Mocked"

# Label used in raw declarations for a parameter without a call-site label
UNLABELED = "_"


@dataclass(frozen=True)
class SourceLocation:
    """Position of a raw node in its source file."""

    file: str | None = None
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        parts = [self.file or "<unknown>"]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


@dataclass(frozen=True)
class Parameter:
    """A single method parameter.

    Attributes:
        label: External label. None when the declaration spells a single
            name (used for both call site and body), "_" when the parameter
            has no call-site label.
        name: Internal binding name used inside the method body.
        type: Opaque type expression.
    """

    label: str | None
    name: str
    type: str

    @property
    def call_label(self) -> str | None:
        """Label required at the call site, or None for positional use."""
        if self.label is None:
            return self.name
        if self.label == UNLABELED:
            return None
        return self.label

    @property
    def slot_name(self) -> str:
        """Name contributed to override-slot identifiers and signatures."""
        return self.call_label or self.name

    @property
    def declaration(self) -> str:
        """Parameter as written in a method signature."""
        if self.label is None:
            return f"{self.name}: {self.type}"
        return f"{self.label} {self.name}: {self.type}"


@dataclass(frozen=True)
class PropertyMember:
    name: str
    type: str
    mutable: bool = True

    @property
    def display_signature(self) -> str:
        accessors = "{ get set }" if self.mutable else "{ get }"
        return f"var {self.name}: {self.type} {accessors}"


@dataclass(frozen=True)
class MethodMember:
    """A method requirement; names may repeat across overloads."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str = VOID_TYPE
    is_async: bool = False
    can_fail: bool = False
    concurrency_safe: bool = False

    @property
    def display_signature(self) -> str:
        """Human-readable signature used in error messages."""
        params = ", ".join(p.declaration for p in self.parameters)
        effects = "".join(
            f" {word}"
            for word, enabled in (("async", self.is_async), ("throws", self.can_fail))
            if enabled
        )
        return f"func {self.name}({params}){effects} -> {self.return_type}"


@dataclass(frozen=True)
class AssociatedTypeSlot:
    name: str
    constraint: str = ""


@dataclass(frozen=True)
class InterfaceDeclaration:
    """Normalized interface declaration.

    Attributes:
        name: Interface name.
        inherited_markers: Inherited capability marker names, in order.
        properties: Property requirements, in declaration order.
        methods: Method requirements, in declaration order.
        associated_types: Associated type slots, in declaration order.
        location: Where the declaration came from, when known.
    """

    name: str
    inherited_markers: tuple[str, ...] = ()
    properties: tuple[PropertyMember, ...] = ()
    methods: tuple[MethodMember, ...] = ()
    associated_types: tuple[AssociatedTypeSlot, ...] = ()
    location: SourceLocation | None = None


class ContainerKind(Enum):
    """Semantics of the generated type."""

    RECORD = "record"
    REFERENCE = "reference"


@dataclass(frozen=True)
class SynthesisOptions:
    """Marker names that drive synthesis.

    Attributes:
        reference_marker: Inherited marker that selects reference semantics.
        concurrency_marker: Inherited marker that makes override closures
            concurrency-safe.
    """

    reference_marker: str = "AnyObject"
    concurrency_marker: str = "Sendable"


@dataclass(frozen=True)
class GenericParameter:
    name: str
    constraint: str = ""

    @property
    def declaration(self) -> str:
        if self.constraint:
            return f"{self.name}: {self.constraint}"
        return self.name


@dataclass(frozen=True)
class StoredField:
    name: str
    type: str
    mutable: bool
    visibility: VisibilityTier


@dataclass(frozen=True)
class OverrideSlot:
    """Optional per-method closure stored on the mock.

    Attributes:
        slot_id: Unique identifier, also the initializer parameter name.
        field_name: Name of the stored closure field.
        signature: Closure type string, always nullable.
        visibility: Always the narrowest tier.
    """

    slot_id: str
    field_name: str
    signature: str
    visibility: VisibilityTier


@dataclass(frozen=True)
class InitializerParameter:
    name: str
    type: str
    optional: bool = False


@dataclass(frozen=True)
class Initializer:
    """Initializer of the mock.

    Attributes:
        visibility: Resolved tier, verbatim.
        parameters: Property parameters followed by override parameters.
        assignments: (stored member, parameter) pairs in parameter order.
    """

    visibility: VisibilityTier
    parameters: tuple[InitializerParameter, ...] = ()
    assignments: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class MethodImplementation:
    """Forwarding body for one interface method.

    Attributes:
        method: The interface method being implemented.
        slot: The override slot the body consults.
        visibility: Visibility of the generated method.
        fallback_message: Message used when the slot is unset.
        forwarded_arguments: Binding names passed to the closure, in order.
    """

    method: MethodMember
    slot: OverrideSlot
    visibility: VisibilityTier
    fallback_message: str
    forwarded_arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class SynthesizedType:
    """A complete mock type, ready for rendering."""

    name: str
    interface_name: str
    container_kind: ContainerKind
    visibility: VisibilityTier
    initializer: Initializer
    generic_parameters: tuple[GenericParameter, ...] = ()
    fields: tuple[StoredField, ...] = ()
    override_slots: tuple[OverrideSlot, ...] = ()
    methods: tuple[MethodImplementation, ...] = ()

    @property
    def is_reference(self) -> bool:
        return self.container_kind is ContainerKind.REFERENCE


@dataclass(frozen=True)
class Diagnostic:
    """Structured failure report sent to the diagnostic channel.

    Attributes:
        source_node: The raw node the report is about.
        message: Human-readable explanation.
        severity: "error" for synthesis failures, "defect" for engine bugs.
        location: Source position of the node, when the parser supplied one.
    """

    source_node: Mapping[str, Any] = field(compare=False, repr=False)
    message: str
    severity: str = "error"
    location: SourceLocation | None = None

    @property
    def node_name(self) -> str:
        return str(self.source_node.get("name", "<anonymous>"))

    def format(self) -> str:
        where = f"{self.location}: " if self.location is not None else ""
        return f"{where}{self.severity}: {self.message}"

"""Materialization of synthesized mocks as live Python classes.

materialize() turns a SynthesizedType into a class honoring the same
contract the rendered source does:

- record mocks compare by value and copy independently, reference mocks
  compare by identity;
- read-only fields cannot be assigned after construction, override slots
  can never be reassigned;
- each interface method name dispatches to its overloads, forwarding to the
  override or raising MockNotImplemented when the slot was left unset.

Example:
    Greeter = materialize(synthesize(extract_interface(node)))
    mock = Greeter(name="Ada", greet=lambda: "hi")
    assert mock.greet() == "hi"
"""

from __future__ import annotations

import copy
import types
from collections import defaultdict
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from .dispatch import bind_arguments, bind_initializer, forward

if TYPE_CHECKING:
    from collections.abc import Callable

    from mocked.core.models import MethodImplementation, SynthesizedType

# Module reported by generated classes
GENERATED_MODULE = "mocked.runtime.generated"


class MockBase:
    """Behavior shared by every materialized mock."""

    __mock_model__: ClassVar[SynthesizedType]
    _field_names: ClassVar[tuple[str, ...]] = ()
    _readonly_fields: ClassVar[frozenset[str]] = frozenset()
    _implementations: ClassVar[dict[str, MethodImplementation]] = {}

    def __init__(self, *args: Any, **kwargs: Any) -> None:  # noqa: ANN401
        model = type(self).__mock_model__
        bound = bind_initializer(model.name, model.initializer.parameters, args, kwargs)
        for name in self._field_names:
            object.__setattr__(self, name, bound[name])
        object.__setattr__(
            self,
            "_overrides",
            types.MappingProxyType(
                {slot.slot_id: bound[slot.slot_id] for slot in model.override_slots}
            ),
        )

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        if name in self._readonly_fields:
            raise AttributeError(
                f"'{type(self).__name__}' field '{name}' is read-only"
            )
        if name == "_overrides":
            raise AttributeError(
                f"'{type(self).__name__}' override slots cannot be reassigned"
            )
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._field_names)
        return f"{type(self).__name__}({fields})"

    def invoke(self, slot_id: str, *args: Any) -> Any:  # noqa: ANN401
        """Call the method owning `slot_id` with positional arguments.

        Useful for overloads that differ only by effects, which cannot be
        told apart from their arguments.
        """
        implementation = self._implementations.get(slot_id)
        if implementation is None:
            raise KeyError(f"{type(self).__name__} has no override slot '{slot_id}'")
        expected = len(implementation.method.parameters)
        if len(args) != expected:
            raise TypeError(
                f"{slot_id} takes {expected} arguments but {len(args)} were given"
            )
        return self._forward(implementation, tuple(args))

    def is_overridden(self, slot_id: str) -> bool:
        """Whether an override was supplied for the slot."""
        return self._overrides[slot_id] is not None

    def _forward(
        self, implementation: MethodImplementation, values: tuple[Any, ...]
    ) -> Any:  # noqa: ANN401
        override = self._overrides[implementation.slot.slot_id]
        return forward(implementation, override, values)


class RecordMockBase(MockBase):
    """Value semantics: equality by field values and overrides, explicit copies."""

    __hash__ = None  # type: ignore[assignment]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name) for name in self._field_names
        ) and dict(self._overrides) == dict(other._overrides)  # type: ignore[attr-defined]

    def copy(self) -> RecordMockBase:
        """Return an independent copy; later field writes do not leak."""
        return copy.copy(self)


class ReferenceMockBase(MockBase):
    """Reference semantics: identity equality, shared mutation."""

    pass


def _dispatcher(
    name: str, implementations: list[MethodImplementation]
) -> Callable[..., Any]:
    def dispatch(self: MockBase, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        matches = [
            (implementation, values)
            for implementation in implementations
            if (values := bind_arguments(implementation.method, args, kwargs))
            is not None
        ]
        if not matches:
            expected = "; ".join(i.method.display_signature for i in implementations)
            raise TypeError(
                f"{type(self).__name__}.{name}() arguments match no overload: {expected}"
            )
        if len(matches) > 1:
            slots = ", ".join(i.slot.slot_id for i, _ in matches)
            raise TypeError(
                f"{type(self).__name__}.{name}() call is ambiguous between slots "
                f"{slots}; use invoke(slot_id, ...)"
            )
        implementation, values = matches[0]
        return self._forward(implementation, values)

    dispatch.__name__ = name
    dispatch.__qualname__ = name
    dispatch.__doc__ = "\n".join(i.method.display_signature for i in implementations)
    return dispatch


def materialize(synthesized: SynthesizedType) -> type[MockBase]:
    """Build a Python class implementing the synthesized mock.

    Associated types become TypeVars and the class is Generic over them,
    so ``MockedRepository[str](...)`` works as it does in the rendered code.
    """
    base = ReferenceMockBase if synthesized.is_reference else RecordMockBase
    type_vars = tuple(TypeVar(g.name) for g in synthesized.generic_parameters)
    bases: tuple[Any, ...] = (base,)
    if type_vars:
        bases += (Generic[type_vars],)  # type: ignore[index]

    overloads: dict[str, list[MethodImplementation]] = defaultdict(list)
    for implementation in synthesized.methods:
        overloads[implementation.method.name].append(implementation)

    namespace: dict[str, Any] = {
        "__mock_model__": synthesized,
        "__module__": GENERATED_MODULE,
        "__doc__": f"Mocked version of {synthesized.interface_name}",
        "_field_names": tuple(f.name for f in synthesized.fields),
        "_readonly_fields": frozenset(
            f.name for f in synthesized.fields if not f.mutable
        ),
        "_implementations": {i.slot.slot_id: i for i in synthesized.methods},
    }
    for name, implementations in overloads.items():
        namespace[name] = _dispatcher(name, implementations)

    return types.new_class(
        synthesized.name, bases, exec_body=lambda ns: ns.update(namespace)
    )

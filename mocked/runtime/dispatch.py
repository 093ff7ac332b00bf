"""Call-time plumbing for materialized mocks.

Binding follows the declared parameter labels: unlabeled parameters are
positional-only, labeled ones are accepted by keyword (their call label)
or by position. Overloads sharing a method name are told apart by which
of them accept the given arguments.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from mocked.core.models import InitializerParameter, MethodImplementation, MethodMember


class MockNotImplemented(BaseException):
    """Raised when a mock method is called without its override.

    Derives from BaseException, like SystemExit, so that ``except Exception``
    blocks in the code under test cannot swallow it.

    Attributes:
        slot_id: Override slot that was left unset.
    """

    def __init__(self, message: str, slot_id: str) -> None:
        self.slot_id = slot_id
        super().__init__(message)


def bind_arguments(
    method: MethodMember, args: Sequence[Any], kwargs: Mapping[str, Any]
) -> tuple[Any, ...] | None:
    """Map call arguments onto the method's parameters.

    Returns:
        Argument values in declaration order, or None when the call does
        not fit this method.
    """
    parameters = method.parameters
    if len(args) > len(parameters):
        return None
    values = list(args)
    remaining = dict(kwargs)
    for parameter in parameters[len(args):]:
        label = parameter.call_label
        if label is None or label not in remaining:
            return None
        values.append(remaining.pop(label))
    if remaining:
        return None
    return tuple(values)


def bind_initializer(
    type_name: str,
    parameters: Sequence[InitializerParameter],
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
) -> dict[str, Any]:
    """Bind initializer arguments by name; overrides default to None.

    Raises:
        TypeError: On surplus, unknown, duplicate or missing arguments.
    """
    if len(args) > len(parameters):
        raise TypeError(
            f"{type_name}() takes at most {len(parameters)} positional "
            f"arguments but {len(args)} were given"
        )
    names = [parameter.name for parameter in parameters]
    bound = dict(zip(names, args, strict=False))

    for key, value in kwargs.items():
        if key not in names:
            raise TypeError(f"{type_name}() got an unexpected keyword argument '{key}'")
        if key in bound:
            raise TypeError(f"{type_name}() got multiple values for argument '{key}'")
        bound[key] = value

    missing = [
        p.name for p in parameters if not p.optional and p.name not in bound
    ]
    if missing:
        listed = ", ".join(f"'{name}'" for name in missing)
        raise TypeError(f"{type_name}() missing required arguments: {listed}")

    for parameter in parameters:
        if not parameter.optional:
            continue
        override = bound.setdefault(parameter.name, None)
        if override is not None and not callable(override):
            raise TypeError(
                f"{type_name}() override '{parameter.name}' must be callable, "
                f"got {type(override).__name__}"
            )
    return bound


def forward(
    implementation: MethodImplementation,
    override: Callable[..., Any] | None,
    values: tuple[Any, ...],
) -> Any:  # noqa: ANN401
    """Call the override with the bound values, or fail when it is unset.

    Async methods return a coroutine; the missing-override failure then
    surfaces when it is awaited, like any other error of the call.
    """
    if implementation.method.is_async:
        return _forward_async(implementation, override, values)
    if override is None:
        raise MockNotImplemented(
            implementation.fallback_message, implementation.slot.slot_id
        )
    return override(*values)


async def _forward_async(
    implementation: MethodImplementation,
    override: Callable[..., Any] | None,
    values: tuple[Any, ...],
) -> Any:  # noqa: ANN401
    if override is None:
        raise MockNotImplemented(
            implementation.fallback_message, implementation.slot.slot_id
        )
    result = override(*values)
    if inspect.isawaitable(result):
        result = await result
    return result

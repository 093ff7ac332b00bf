"""Exception hierarchy for mocked.

Two families are kept apart:
- SynthesisError: invalid user input. Surfaced as a diagnostic, no artifact.
- SynthesisDefect: conditions a well-formed declaration never produces.
  These indicate an engine or parser bug.

DeclarationLoadError covers unreadable or malformed declaration files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mocked.core.models import MethodMember, PropertyMember


class MockedError(Exception):
    """Base exception for all mocked errors."""

    pass


class SynthesisError(MockedError):
    """Raised when a declaration cannot be mocked because of user input."""

    pass


class NotAnInterfaceError(SynthesisError):
    """Raised when the directive is attached to something other than an interface.

    Example:
        >>> raise NotAnInterfaceError("Widget", "struct")
        NotAnInterfaceError: Mocked can only be applied to protocols; 'Widget' is a struct
    """

    def __init__(self, name: str, kind: str | None) -> None:
        self.name = name
        self.kind = kind
        described = kind if kind else "declaration of unknown kind"
        super().__init__(
            f"Mocked can only be applied to protocols; '{name}' is a {described}"
        )


class InvalidVisibilityError(SynthesisError):
    """Raised when the visibility token is not one of the six tiers."""

    def __init__(self, token: str, valid: list[str] | None = None) -> None:
        self.token = token
        self.valid = valid or []
        message = f"Invalid visibility '{token}'"
        if self.valid:
            message += f". Expected one of: {', '.join(self.valid)}"
        super().__init__(message)


class MalformedDirectiveError(SynthesisError):
    """Raised when the directive carries unusable arguments."""

    def __init__(self, directive: str, reason: str) -> None:
        self.directive = directive
        self.reason = reason
        super().__init__(f"Malformed @{directive} directive: {reason}")


class SynthesisDefect(MockedError):
    """Raised for internal-consistency failures. Indicates a bug."""

    pass


class MissingTypeAnnotationError(SynthesisDefect):
    """Raised when a property requirement has no declared type."""

    def __init__(self, interface: str, member: str) -> None:
        self.interface = interface
        self.member = member
        super().__init__(
            f"Property '{member}' of '{interface}' has no type annotation"
        )


class OverrideSlotCollisionError(SynthesisDefect):
    """Raised when two members would share an override slot or field."""

    def __init__(
        self,
        slot_id: str,
        first: MethodMember | PropertyMember,
        second: MethodMember,
    ) -> None:
        self.slot_id = slot_id
        self.first = first
        self.second = second
        super().__init__(
            f"Override slot '{slot_id}' is shared by "
            f"'{first.display_signature}' and '{second.display_signature}'"
        )


class DeclarationLoadError(MockedError):
    """Raised when a declaration file cannot be read or has the wrong shape."""

    pass

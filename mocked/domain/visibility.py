"""Visibility tiers and the resolver for the directive's visibility token."""

from __future__ import annotations

from enum import Enum

from mocked.domain.errors import InvalidVisibilityError


class VisibilityTier(Enum):
    """Access tiers, declared from broadest to narrowest.

    - OPEN: usable and subclassable across module boundaries
    - PUBLIC: usable across module boundaries, not subclassable externally
    - PACKAGE: usable within the declaring package
    - INTERNAL: usable within the defining module (default)
    - FILEPRIVATE: usable within the defining file
    - PRIVATE: usable only within the enclosing declaration
    """

    OPEN = "open"
    PUBLIC = "public"
    PACKAGE = "package"
    INTERNAL = "internal"
    FILEPRIVATE = "fileprivate"
    PRIVATE = "private"


DEFAULT_VISIBILITY = VisibilityTier.INTERNAL

# Tier pinned on override-slot fields regardless of the resolved tier
OVERRIDE_SLOT_VISIBILITY = VisibilityTier.PRIVATE

# Tiers that only make sense on the type and its initializer
_TYPE_ONLY_TIERS = frozenset({VisibilityTier.OPEN, VisibilityTier.PACKAGE})


def valid_tokens() -> list[str]:
    """Token names accepted by resolve_visibility, broadest first."""
    return [tier.value for tier in VisibilityTier]


def resolve_visibility(token: str | None) -> VisibilityTier:
    """Resolve the optional directive token to a tier.

    Tokens may be written bare (``public``) or in member form (``.public``).

    Raises:
        InvalidVisibilityError: If the token names no tier.

    Examples:
        >>> resolve_visibility(None)
        <VisibilityTier.INTERNAL: 'internal'>
        >>> resolve_visibility(".fileprivate")
        <VisibilityTier.FILEPRIVATE: 'fileprivate'>
    """
    if token is None:
        return DEFAULT_VISIBILITY
    normalized = token.strip()
    if normalized.startswith("."):
        normalized = normalized[1:]
    try:
        return VisibilityTier(normalized)
    except ValueError:
        raise InvalidVisibilityError(token, valid_tokens()) from None


def member_visibility(resolved: VisibilityTier) -> VisibilityTier:
    """Tier for stored fields and method implementations.

    Open and package have no meaning on members of the mock, so they are
    emitted as public. Every other tier passes through unchanged.
    """
    if resolved in _TYPE_ONLY_TIERS:
        return VisibilityTier.PUBLIC
    return resolved

"""Live Python classes built from synthesized mocks."""

from .dispatch import MockNotImplemented
from .factory import MockBase, materialize

__all__ = ["MockBase", "MockNotImplemented", "materialize"]

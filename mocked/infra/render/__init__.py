"""Renderers turning synthesized mocks into target syntax."""

from .swift import SwiftRenderer

__all__ = ["SwiftRenderer"]

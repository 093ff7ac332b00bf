"""mocked: synthesizes override-driven mock types from interface declarations."""

from .domain.expansion import MockExpander

__version__ = "0.1.0"
__all__ = ["MockExpander", "__version__"]

"""Abstract base classes for snippet generation strategies."""

from figscript.interfaces.template import BaseTemplateRenderer

__all__ = [
    "BaseTemplateRenderer",
]

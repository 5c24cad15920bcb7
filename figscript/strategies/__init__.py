"""Concrete strategy implementations."""

from figscript.strategies.template_engine import TemplateRenderer

__all__ = [
    "TemplateRenderer",
]

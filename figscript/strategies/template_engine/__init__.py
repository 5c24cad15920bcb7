"""Template engine strategies.

Implements conditional snippet templating over pluggable marker syntaxes.
"""

from figscript.strategies.template_engine.models import Conditional, Placeholder, Text
from figscript.strategies.template_engine.parser import TemplateParser, parse, tokenize
from figscript.strategies.template_engine.renderer import TemplateRenderer, render_template
from figscript.strategies.template_engine.syntax import (
    DIRECTIVE,
    MUSTACHE,
    TemplateSyntax,
    get_syntax,
)

__all__ = [
    "Conditional",
    "Placeholder",
    "Text",
    "TemplateParser",
    "parse",
    "tokenize",
    "TemplateRenderer",
    "render_template",
    "TemplateSyntax",
    "MUSTACHE",
    "DIRECTIVE",
    "get_syntax",
]

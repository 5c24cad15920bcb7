"""Template renderer strategy.

Renders snippet templates in two passes: the parser builds a node tree,
then the evaluator walks it against the variable bindings. Values are
inserted after parsing, so a value that looks like template syntax is
emitted literally.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Literal

from figscript.interfaces.template import BaseTemplateRenderer
from figscript.strategies.template_engine.models import Conditional, Node, Placeholder, Text
from figscript.strategies.template_engine.parser import TemplateParser
from figscript.strategies.template_engine.syntax import MUSTACHE, TemplateSyntax

logger = logging.getLogger(__name__)

# Two or more line breaks separated only by horizontal whitespace.
_BLANK_LINES = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)*")


def has_value(value: str | None) -> bool:
    """Return True if a bound value counts as present."""
    return value is not None and value.strip() != ""


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of blank lines into a single blank line."""
    return _BLANK_LINES.sub("\n\n", text)


class TemplateRenderer(BaseTemplateRenderer):
    """Conditional template renderer.

    Example:
        ```python
        renderer = TemplateRenderer()
        renderer.render("node.x = {{x}};{{#if y}} node.y = {{y}};{{/if}}", {"x": "10"})
        # 'node.x = 10;'
        ```
    """

    def __init__(
        self,
        syntax: TemplateSyntax = MUSTACHE,
        unresolved: Literal["keep", "blank"] = "keep",
    ) -> None:
        """Initialize the renderer.

        Args:
            syntax: Marker syntax to parse.
            unresolved: ``keep`` emits placeholders without a value verbatim,
                ``blank`` drops them.
        """
        if unresolved not in ("keep", "blank"):
            raise ValueError(f"Unknown unresolved placeholder policy: {unresolved}")
        self._syntax = syntax
        self._keep_unresolved = unresolved == "keep"

    @property
    def syntax_name(self) -> str:
        return self._syntax.name

    def parse(self, template: str) -> list[Node]:
        return TemplateParser(self._syntax).parse(template)

    def render(self, template: str, variables: Mapping[str, str]) -> str:
        if not template:
            return ""
        parts: list[str] = []
        self._evaluate(self.parse(template), variables, parts)
        output = "".join(parts).replace("\r\n", "\n")
        return collapse_blank_lines(output).strip()

    def variables(self, template: str) -> set[str]:
        names: set[str] = set()
        self._collect(self.parse(template), names)
        return names

    def _evaluate(self, nodes: Sequence[Node], variables: Mapping[str, str], out: list[str]) -> None:
        for node in nodes:
            match node:
                case Text(value):
                    out.append(value)
                case Placeholder(name, source):
                    value = variables.get(name)
                    if has_value(value):
                        out.append(value)
                    elif self._keep_unresolved:
                        out.append(source)
                case Conditional(name, body, alternative):
                    branch = body if has_value(variables.get(name)) else alternative
                    self._evaluate(branch, variables, out)

    def _collect(self, nodes: Sequence[Node], names: set[str]) -> None:
        for node in nodes:
            match node:
                case Placeholder(name, _):
                    names.add(name)
                case Conditional(name, body, alternative):
                    names.add(name)
                    self._collect(body, names)
                    self._collect(alternative, names)


def render_template(
    template: str,
    variables: Mapping[str, str],
    syntax: TemplateSyntax = MUSTACHE,
) -> str:
    """Render a template with the default placeholder policy."""
    return TemplateRenderer(syntax).render(template, variables)

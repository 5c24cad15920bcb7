"""Runnable script assembly.

Turns rendered snippets into a script that can be pasted into a Figma
scripting plugin: helper functions first, then a loop over the current
selection with every snippet applied to ``node``.
"""

import logging
from collections.abc import Iterable

from figscript.interfaces.template import BaseTemplateRenderer
from figscript.script.helpers import get_helper
from figscript.strategies.template_engine.renderer import TemplateRenderer
from figscript.tasks.models import TaskItem

logger = logging.getLogger(__name__)

SELECTION_HEADER = "const selection = figma.currentPage.selection;"
LOOP_OPEN = "for (const node of selection) {"
LOOP_CLOSE = "}"


class ScriptAssembler:
    """Builds runnable scripts from task items."""

    def __init__(
        self,
        renderer: BaseTemplateRenderer | None = None,
        indent: int = 2,
        include_comments: bool = True,
        include_helpers: bool = True,
    ) -> None:
        """Initialize the assembler.

        Args:
            renderer: Renderer used for each item's template.
            indent: Spaces prefixed to snippet lines inside the loop.
            include_comments: Prepend each item's comment to its snippet.
            include_helpers: Emit helper functions above the loop.
        """
        self._renderer = renderer or TemplateRenderer()
        self._indent = " " * indent
        self._include_comments = include_comments
        self._include_helpers = include_helpers

    def wrap(self, body: str) -> str:
        """Wrap a script body in the iteration over the current selection.

        Returns an empty string for a blank body.
        """
        if not body.strip():
            return ""
        lines = [self._indent + line if line.strip() else "" for line in body.splitlines()]
        return "\n".join([SELECTION_HEADER, LOOP_OPEN, *lines, LOOP_CLOSE])

    def build_snippet(self, item: TaskItem) -> str:
        """Render one item, with its comment line when configured."""
        code = self._renderer.render(item.template, item.vars)
        if not code:
            return ""
        if self._include_comments and item.comment:
            return f"{item.comment}\n{code}"
        return code

    def build_script(self, items: Iterable[TaskItem]) -> str:
        """Assemble a runnable script from items in order.

        Items rendering to nothing contribute neither code nor helpers.
        """
        snippets: list[str] = []
        helper_names: list[str] = []
        for item in items:
            snippet = self.build_snippet(item)
            if not snippet:
                continue
            snippets.append(snippet)
            helper_names.extend(name for name in item.helpers if name not in helper_names)

        script = self.wrap("\n\n".join(snippets))
        if not script or not self._include_helpers:
            return script

        blocks = []
        for name in helper_names:
            helper = get_helper(name)
            if helper is None:
                logger.warning(f"Unknown helper skipped: {name}")
                continue
            blocks.append(f"// {helper.description}\n{helper.source}")
        return "\n\n".join([*blocks, script])

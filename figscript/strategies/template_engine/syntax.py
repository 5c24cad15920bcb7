"""Template syntax presets.

A syntax preset describes the four markers the tokenizer recognises.
Each pattern captures the variable name in a group called ``name``;
the group is optional for alternative and closing markers.
"""

import re
from dataclasses import dataclass
from functools import cached_property

from figscript.strategies.template_engine.models import TokenKind


@dataclass(frozen=True)
class TemplateSyntax:
    """Marker patterns for one template dialect."""

    name: str
    open: str
    alternative: str
    close: str
    placeholder: str

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        """Single alternation matching any marker, openers first."""
        parts = []
        for kind, source in self._markers():
            named = source.replace("(?P<name>", f"(?P<{kind.value}_name>")
            parts.append(f"(?P<{kind.value}>{named})")
        return re.compile("|".join(parts))

    def _markers(self) -> tuple[tuple[TokenKind, str], ...]:
        # Order matters: "else" must win over a placeholder named "else".
        return (
            (TokenKind.OPEN, self.open),
            (TokenKind.ELSE, self.alternative),
            (TokenKind.CLOSE, self.close),
            (TokenKind.PLACEHOLDER, self.placeholder),
        )

    def match_kind(self, match: re.Match[str]) -> tuple[TokenKind, str | None]:
        """Return the token kind and variable name of a marker match."""
        for kind, _ in self._markers():
            if match.group(kind.value) is not None:
                return kind, match.group(f"{kind.value}_name")
        raise ValueError(f"Match does not belong to syntax '{self.name}': {match.group(0)!r}")


MUSTACHE = TemplateSyntax(
    name="mustache",
    open=r"\{\{#if\s+(?P<name>\w+)\s*\}\}",
    alternative=r"\{\{else(?:\s+(?P<name>\w+))?\s*\}\}",
    close=r"\{\{/if(?:\s+(?P<name>\w+))?\s*\}\}",
    placeholder=r"\{\{\s*(?P<name>\w+)\s*\}\}",
)

DIRECTIVE = TemplateSyntax(
    name="directive",
    open=r"(?<!END)IF\((?P<name>\w+)\)",
    alternative=r"ELSE\((?P<name>\w+)\)",
    close=r"ENDIF\((?P<name>\w+)\)",
    placeholder=r"VAR\((?P<name>\w+)\)",
)

SYNTAXES: dict[str, TemplateSyntax] = {
    MUSTACHE.name: MUSTACHE,
    DIRECTIVE.name: DIRECTIVE,
}


def get_syntax(name: str) -> TemplateSyntax:
    """Look up a syntax preset by name.

    Raises:
        ValueError: If the preset is unknown.
    """
    try:
        return SYNTAXES[name]
    except KeyError:
        raise ValueError(
            f"Unknown template syntax: {name}. Valid options: {', '.join(sorted(SYNTAXES))}"
        ) from None

"""Template engine domain models.

Tokens produced by the tokenizer and the node tree produced by the parser.
"""

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(str, Enum):
    """Kinds of lexical tokens in a template."""

    TEXT = "text"
    PLACEHOLDER = "placeholder"
    OPEN = "open"
    ELSE = "else"
    CLOSE = "close"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Attributes:
        kind: Token kind.
        text: Exact source text of the token.
        name: Variable name carried by the marker, if any.
    """

    kind: TokenKind
    text: str
    name: str | None = None


@dataclass(frozen=True)
class Text:
    """Literal text copied verbatim to the output."""

    value: str


@dataclass(frozen=True)
class Placeholder:
    """A variable reference.

    ``source`` keeps the marker text so an unresolved placeholder
    can be emitted verbatim.
    """

    name: str
    source: str


@dataclass(frozen=True)
class Conditional:
    """A conditional block keyed by a variable.

    ``body`` renders when the variable has a non-blank value,
    ``alternative`` otherwise.
    """

    name: str
    body: tuple["Node", ...] = field(default_factory=tuple)
    alternative: tuple["Node", ...] = field(default_factory=tuple)


Node = Text | Placeholder | Conditional

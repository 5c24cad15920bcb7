"""Template tokenizer and recursive-descent parser.

Turns template source into a tree of ``Text``, ``Placeholder`` and
``Conditional`` nodes. The parser never fails: markers that cannot be
paired (an opener without a closer, a stray ``else`` or closer) are kept
as literal text.
"""

import logging
from collections.abc import Iterator

from figscript.strategies.template_engine.models import (
    Conditional,
    Node,
    Placeholder,
    Text,
    Token,
    TokenKind,
)
from figscript.strategies.template_engine.syntax import MUSTACHE, TemplateSyntax

logger = logging.getLogger(__name__)


def tokenize(template: str, syntax: TemplateSyntax = MUSTACHE) -> Iterator[Token]:
    """Split a template into literal text and marker tokens."""
    position = 0
    for match in syntax.pattern.finditer(template):
        if match.start() > position:
            yield Token(TokenKind.TEXT, template[position:match.start()])
        kind, name = syntax.match_kind(match)
        yield Token(kind, match.group(0), name)
        position = match.end()
    if position < len(template):
        yield Token(TokenKind.TEXT, template[position:])


class TemplateParser:
    """Recursive-descent parser over the token stream of one template."""

    def __init__(self, syntax: TemplateSyntax = MUSTACHE) -> None:
        self._syntax = syntax
        self._tokens: list[Token] = []
        self._pos = 0

    def parse(self, template: str) -> list[Node]:
        """Parse ``template`` into a list of nodes."""
        self._tokens = list(tokenize(template, self._syntax))
        self._pos = 0
        nodes, _ = self._parse_sequence(())
        return nodes

    def _parse_sequence(self, open_names: tuple[str, ...]) -> tuple[list[Node], Token | None]:
        """Parse nodes until a marker that belongs to an enclosing block.

        Returns the parsed nodes and the unconsumed stop token, or None
        when the input is exhausted.
        """
        nodes: list[Node] = []
        while self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            match token.kind:
                case TokenKind.TEXT:
                    nodes.append(Text(token.text))
                    self._pos += 1
                case TokenKind.PLACEHOLDER:
                    nodes.append(Placeholder(token.name or "", token.text))
                    self._pos += 1
                case TokenKind.OPEN:
                    self._pos += 1
                    nodes.extend(self._parse_conditional(token, open_names + (token.name or "",)))
                case TokenKind.ELSE | TokenKind.CLOSE:
                    if open_names and (token.name is None or token.name in open_names):
                        return nodes, token
                    logger.debug(f"Unpaired marker kept as text: {token.text!r}")
                    nodes.append(Text(token.text))
                    self._pos += 1
        return nodes, None

    def _parse_conditional(self, opener: Token, open_names: tuple[str, ...]) -> list[Node]:
        body, stop = self._parse_sequence(open_names)

        else_token: Token | None = None
        alternative: list[Node] = []
        while stop is not None and stop.kind is TokenKind.ELSE and self._belongs_to(stop, opener):
            self._pos += 1
            if else_token is None:
                else_token = stop
            else:
                # A second alternative marker for the same block is literal.
                alternative.append(Text(stop.text))
            more, stop = self._parse_sequence(open_names)
            alternative.extend(more)

        if stop is not None and stop.kind is TokenKind.CLOSE and self._belongs_to(stop, opener):
            self._pos += 1
            return [Conditional(opener.name or "", tuple(body), tuple(alternative))]

        logger.debug(f"Unclosed block kept as text: {opener.text!r}")
        demoted: list[Node] = [Text(opener.text), *body]
        if else_token is not None:
            demoted.append(Text(else_token.text))
            demoted.extend(alternative)
        return demoted

    @staticmethod
    def _belongs_to(marker: Token, opener: Token) -> bool:
        return marker.name is None or marker.name == opener.name


def parse(template: str, syntax: TemplateSyntax = MUSTACHE) -> list[Node]:
    """Parse a template with a fresh parser."""
    return TemplateParser(syntax).parse(template)

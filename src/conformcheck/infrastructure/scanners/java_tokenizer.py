"""Java tokenizer.

Produces a flat stream of significant tokens. Comments are dropped,
but a `/** ... */` comment marks the next significant token with
`doc=True` so declarations can report literal documentation presence.

Unknown characters become single-character OP tokens. Only
unterminated comments and literals are unrecoverable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.source import MalformedSourceError

if TYPE_CHECKING:
    from pathlib import Path


class TokenKind(Enum):
    """Kind of significant token."""

    IDENT = auto()  # identifiers and keywords
    NUMBER = auto()
    STRING = auto()  # string, text block and char literals
    OP = auto()  # operators, separators, '@'


@dataclass(frozen=True, slots=True)
class Token:
    """Significant token.

    Attributes:
        kind: Token kind
        text: Source text
        line: 1-based line
        column: 0-based column
        doc: True if a doc comment precedes this token
    """

    kind: TokenKind
    text: str
    line: int
    column: int
    doc: bool = False

    @property
    def is_ident(self) -> bool:
        """True for identifiers and keywords."""
        return self.kind == TokenKind.IDENT


_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<doc>/\*\*(?!/).*?\*/)
  | (?P<block>/\*.*?\*/)
  | (?P<open_block>/\*)
  | (?P<line>//[^\n]*)
  | (?P<text_block>\"\"\"[ \t\f]*\r?\n(?:\\.|[^\\])*?\"\"\")
  | (?P<open_text_block>\"\"\")
  | (?P<string>"(?:\\.|[^"\\\n])*")
  | (?P<open_string>")
  | (?P<char>'(?:\\.|[^'\\\n])+')
  | (?P<open_char>')
  | (?P<ident>(?:[^\W\d]|\$)[\w$]*)
  | (?P<number>\d[\w.]*|\.\d[\w.]*)
  | (?P<op>==|!=|<=|>=|&&|\|\||\+\+|--|->|::|\.\.\.|[^\s\w])
    """,
    re.VERBOSE | re.DOTALL,
)

_UNTERMINATED = {
    "open_block": "unterminated block comment",
    "open_text_block": "unterminated text block",
    "open_string": "unterminated string literal",
    "open_char": "unterminated character literal",
}

_KINDS = {
    "ident": TokenKind.IDENT,
    "number": TokenKind.NUMBER,
    "string": TokenKind.STRING,
    "text_block": TokenKind.STRING,
    "char": TokenKind.STRING,
    "op": TokenKind.OP,
}


def tokenize(source: str, path: Path) -> tuple[Token, ...]:
    """Split Java source into significant tokens.

    Args:
        source: Java source text
        path: File path (for error reporting)

    Returns:
        Tokens in source order

    Raises:
        MalformedSourceError: On unterminated comment or literal
    """
    tokens: list[Token] = []
    pos = 0
    line = 1
    line_start = 0
    pending_doc = False
    length = len(source)

    while pos < length:
        match = _TOKEN_RE.match(source, pos)
        if match is None:  # pragma: no cover - op group matches any non-space char
            raise MalformedSourceError(path, f"unexpected character {source[pos]!r}", line)

        group = match.lastgroup
        text = match.group()

        if group in _UNTERMINATED:
            raise MalformedSourceError(path, _UNTERMINATED[group], line)

        if group == "doc":
            pending_doc = True
        elif group in _KINDS:
            tokens.append(
                Token(
                    kind=_KINDS[group],
                    text=text,
                    line=line,
                    column=pos - line_start,
                    doc=pending_doc,
                )
            )
            pending_doc = False

        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rindex("\n") + 1
        pos = match.end()

    return tuple(tokens)

r"""Tokenizer for the conventional commit grammar.

The grammar is small and fixed::

    message   := subject (blank-line trailer)?
    subject   := type? ("(" scope ")")? "!"? ":" " "* header
    type      := letters | "BREAKING CHANGE" | "BREAKING-CHANGE"
    trailer   := any text, split later into body and footer

:func:`tokenize` walks the message with a small recursive-descent scanner
and returns a flat, tagged token stream. It does not judge the tokens:
an empty scope or an empty header still produce a token, so that the lint
engine can map every malformed element to exactly one diagnostic.
``None`` is only returned when the subject cannot be recognised at all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_TYPE_PATTERN: re.Pattern[str] = re.compile(
    r"BREAKING[ -]CHANGE(?![A-Za-z])|[A-Za-z]+", re.IGNORECASE
)


class TokenKind(Enum):
    """Kinds of tokens produced by :func:`tokenize`."""

    TYPE = "type"
    SCOPE = "scope"
    BREAKING = "breaking"
    SEPARATOR = "separator"
    HEADER = "header"
    NEWLINE = "newline"
    TRAILER = "trailer"


@dataclass(frozen=True)
class Token:
    """A tagged slice of the commit message.

    Attributes:
        kind: What the slice represents
        text: The slice content. For ``SCOPE`` this is the text between
            the parentheses, for ``HEADER`` and ``TRAILER`` it is stripped.
        offset: Position of the slice in the trimmed message
    """

    kind: TokenKind
    text: str
    offset: int


class _Scanner:
    """Cursor over the trimmed message."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.tokens: list[Token] = []

    def peek(self) -> str:
        return self.source[self.pos : self.pos + 1]

    def emit(self, kind: TokenKind, text: str, offset: int) -> None:
        self.tokens.append(Token(kind, text, offset))

    # subject := type? scope? "!"? ":" header
    def subject(self) -> bool:
        self.commit_type()
        if not self.scope():
            return False
        self.breaking()
        if not self.separator():
            return False
        self.header()
        return True

    def commit_type(self) -> None:
        match = _TYPE_PATTERN.match(self.source, self.pos)
        if match is None:
            return
        self.emit(TokenKind.TYPE, match.group(0), self.pos)
        self.pos = match.end()

    def scope(self) -> bool:
        if self.peek() != "(":
            return True
        start = self.pos
        line_end = self._line_end()
        close = self.source.find(")", start, line_end)
        if close == -1:
            return False
        self.emit(TokenKind.SCOPE, self.source[start + 1 : close], start)
        self.pos = close + 1
        return True

    def breaking(self) -> None:
        if self.peek() == "!":
            self.emit(TokenKind.BREAKING, "!", self.pos)
            self.pos += 1

    def separator(self) -> bool:
        if self.peek() != ":":
            return False
        self.emit(TokenKind.SEPARATOR, ":", self.pos)
        self.pos += 1
        return True

    def header(self) -> None:
        line_end = self._line_end()
        raw = self.source[self.pos : line_end]
        stripped = raw.lstrip()
        self.emit(TokenKind.HEADER, stripped.rstrip(), self.pos + len(raw) - len(stripped))
        self.pos = line_end

    # trailer := ("\n\n" | "\n") text
    def trailer(self) -> None:
        if self.pos >= len(self.source):
            return
        # pos sits on the newline that ends the subject line
        if self.source.startswith("\n\n", self.pos):
            self.pos += 2
        else:
            self.emit(TokenKind.NEWLINE, "\n", self.pos)
            self.pos += 1

        rest = self.source[self.pos :]
        stripped = rest.strip()
        if stripped:
            self.emit(TokenKind.TRAILER, stripped, self.pos + rest.index(stripped[0]))
        self.pos = len(self.source)

    def _line_end(self) -> int:
        end = self.source.find("\n", self.pos)
        return len(self.source) if end == -1 else end


def tokenize(message: str) -> list[Token] | None:
    """Split a commit message into a tagged token stream.

    Args:
        message: Raw commit message. Surrounding whitespace is ignored and
            Windows line endings are normalised.

    Returns:
        The token stream, or ``None`` if the subject line does not reach a
        ``:`` separator through ``type(scope)!``.

    >>> [t.kind.value for t in tokenize("fix(parser)!: handle commas")]
    ['type', 'scope', 'breaking', 'separator', 'header']
    >>> tokenize("no separator here") is None
    True
    """
    scanner = _Scanner(normalize(message))
    if not scanner.subject():
        return None
    scanner.trailer()
    return scanner.tokens


def normalize(message: str) -> str:
    """Trim the message and normalise line endings."""
    return message.replace("\r\n", "\n").strip()


def find(tokens: list[Token], kind: TokenKind) -> Token | None:
    """Return the first token of ``kind``, if any."""
    return next((token for token in tokens if token.kind is kind), None)

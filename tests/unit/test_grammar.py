"""Tests for the commit message tokenizer."""

from __future__ import annotations

from coco_py.core.grammar import Token, TokenKind, find, normalize, tokenize


def _kinds(tokens: list[Token]) -> list[TokenKind]:
    return [t.kind for t in tokens]


class TestTokenize:
    """Tests for tokenize()."""

    def test_full_subject(self):
        """Every subject element becomes a token."""
        tokens = tokenize("fix(parser)!: handle commas")

        assert _kinds(tokens) == [
            TokenKind.TYPE,
            TokenKind.SCOPE,
            TokenKind.BREAKING,
            TokenKind.SEPARATOR,
            TokenKind.HEADER,
        ]
        assert find(tokens, TokenKind.TYPE).text == "fix"
        assert find(tokens, TokenKind.SCOPE).text == "parser"
        assert find(tokens, TokenKind.HEADER).text == "handle commas"

    def test_offsets(self):
        """Offsets point into the trimmed message."""
        tokens = tokenize("  feat(ui): dark mode")

        assert find(tokens, TokenKind.TYPE).offset == 0
        assert find(tokens, TokenKind.SCOPE).offset == 4
        assert find(tokens, TokenKind.SEPARATOR).offset == 8
        assert find(tokens, TokenKind.HEADER).offset == 10

    def test_empty_elements_still_tokenized(self):
        """Empty scope and header are left for the lint engine to judge."""
        tokens = tokenize("feat():")

        assert find(tokens, TokenKind.SCOPE).text == ""
        assert find(tokens, TokenKind.HEADER).text == ""

    def test_missing_type(self):
        """A subject may start at the scope."""
        tokens = tokenize("(core): x")

        assert find(tokens, TokenKind.TYPE) is None
        assert find(tokens, TokenKind.SCOPE).text == "core"

    def test_breaking_change_type_with_space(self):
        """BREAKING CHANGE is read as a single type token."""
        tokens = tokenize("BREAKING CHANGE: remove v1 endpoints")

        assert find(tokens, TokenKind.TYPE).text == "BREAKING CHANGE"

    def test_trailer_after_blank_line(self):
        """Text after the blank line becomes one trailer token."""
        tokens = tokenize("fix: a\n\nbody\n\nRefs: #1\n")

        assert _kinds(tokens)[-1] is TokenKind.TRAILER
        assert find(tokens, TokenKind.TRAILER).text == "body\n\nRefs: #1"
        assert find(tokens, TokenKind.NEWLINE) is None

    def test_single_newline_is_marked(self):
        """A body directly under the header produces a NEWLINE token."""
        tokens = tokenize("fix: a\nbody")

        assert find(tokens, TokenKind.NEWLINE) is not None
        assert find(tokens, TokenKind.TRAILER).text == "body"

    def test_unrecognised_subjects(self):
        """Messages that never reach the separator are rejected."""
        assert tokenize("") is None
        assert tokenize("no separator") is None
        assert tokenize("feat(open: x") is None
        assert tokenize("feat\n: x") is None


class TestNormalize:
    """Tests for normalize()."""

    def test_strips_and_converts_line_endings(self):
        """CRLF is converted and surrounding whitespace removed."""
        assert normalize("\r\n fix: a\r\n\r\nb \r\n") == "fix: a\n\nb"

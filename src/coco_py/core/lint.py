"""Lint engine for conventional commit messages.

Instead of stopping at the first problem, :func:`lint` inspects every
element of the message and reports each finding as a graded
:class:`Violation`:

====================  =========================================  ==========
Element               Finding                                    Severity
====================  =========================================  ==========
whole message         does not match ``type(scope)!: header``    ERROR
type                  missing                                    ERROR
scope                 ``()`` without content                     ERROR
scope                 no parentheses                             SUGGESTION
header                missing                                    ERROR
body                  no blank line after the header             WARNING
footer                no ``Key: value`` line                     INFO
====================  =========================================  ==========

A :class:`~coco_py.core.commits.Commit` is only built when no ``ERROR``
was found. A message that does not match the grammar at all yields a
single ``ERROR`` and no further checks run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from coco_py.core.commit_type import CommitType
from coco_py.core.commits import Commit
from coco_py.core.footer import split_body_and_footer
from coco_py.core.grammar import Token, TokenKind, find, normalize, tokenize

FORMAT_HINT = "type(scope)!: description\n\n[optional body]\n\n[optional footer(s)]"

# Characters shown on either side of a violation's location.
SOURCE_CONTEXT = 10


class Severity(str, Enum):
    """Severity of a lint finding, from most to least urgent."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUGGESTION = "suggestion"

    @property
    def rank(self) -> int:
        """0 for the most urgent severity."""
        return list(Severity).index(self)

    def is_at_least(self, threshold: Severity) -> bool:
        """Whether this severity is as urgent as ``threshold`` or more."""
        return self.rank <= threshold.rank


@dataclass(frozen=True)
class Violation:
    """A single finding of the lint engine.

    Attributes:
        severity: How urgent the finding is
        message: One-line summary
        description: Optional long-form explanation
        location: Offset into the trimmed message the finding refers to
        source: Excerpt of the message around ``location``
    """

    severity: Severity
    message: str
    description: str | None = None
    location: int = 0
    source: str = ""

    @staticmethod
    def excerpt(message: str, location: int, context: int = SOURCE_CONTEXT) -> str:
        """Cut the part of ``message`` around ``location``."""
        start = max(location - context, 0)
        end = min(location + context, len(message))
        return message[start:end]

    def __str__(self) -> str:
        text = f"{self.severity.value}: {self.message}"
        if self.description:
            text += f"\n  {self.description}"
        return text


@dataclass
class LintResult:
    """Outcome of linting one commit message.

    Attributes:
        commit: The parsed commit, or ``None`` if any ``ERROR`` was found
        diagnostics: Findings ordered by severity, most urgent first
    """

    commit: Commit | None
    diagnostics: list[Violation] = field(default_factory=list)

    def _of(self, severity: Severity) -> list[Violation]:
        return [v for v in self.diagnostics if v.severity is severity]

    @property
    def errors(self) -> list[Violation]:
        return self._of(Severity.ERROR)

    @property
    def warnings(self) -> list[Violation]:
        return self._of(Severity.WARNING)

    @property
    def infos(self) -> list[Violation]:
        return self._of(Severity.INFO)

    @property
    def suggestions(self) -> list[Violation]:
        return self._of(Severity.SUGGESTION)

    @property
    def is_valid(self) -> bool:
        return self.commit is not None

    def fails_at(self, threshold: Severity) -> bool:
        """Whether the result should be rejected at ``threshold``.

        A result without a commit always fails; otherwise it fails when any
        diagnostic is at least as urgent as ``threshold``.
        """
        if self.commit is None:
            return True
        return any(v.severity.is_at_least(threshold) for v in self.diagnostics)


class _Findings:
    """Ordered collection of violations for one message."""

    def __init__(self, message: str) -> None:
        self.message = message
        self.items: list[Violation] = []

    def add(
        self,
        severity: Severity,
        text: str,
        *,
        description: str | None = None,
        location: int = 0,
    ) -> None:
        self.items.append(
            Violation(
                severity=severity,
                message=text,
                description=description,
                location=location,
                source=Violation.excerpt(self.message, location),
            )
        )

    def sorted(self) -> list[Violation]:
        return sorted(self.items, key=lambda v: v.severity.rank)

    @property
    def has_errors(self) -> bool:
        return any(v.severity is Severity.ERROR for v in self.items)


def _check_type(tokens: list[Token], findings: _Findings) -> Token | None:
    token = find(tokens, TokenKind.TYPE)
    if token is None:
        findings.add(
            Severity.ERROR,
            "mandatory commit type is missing",
            description="Start the message with a type such as feat, fix or docs.",
        )
    return token


def _check_scope(tokens: list[Token], findings: _Findings) -> str | None:
    token = find(tokens, TokenKind.SCOPE)
    if token is None:
        separator = find(tokens, TokenKind.SEPARATOR)
        findings.add(
            Severity.SUGGESTION,
            "consider adding a scope",
            description="A scope such as feat(parser): tells where the change happened.",
            location=separator.offset if separator else 0,
        )
        return None

    scope = token.text.strip()
    if not scope:
        findings.add(
            Severity.ERROR,
            "scope is empty; remove parentheses if no scope is given",
            location=token.offset,
        )
        return None
    return scope


def _check_header(tokens: list[Token], findings: _Findings) -> str | None:
    token = find(tokens, TokenKind.HEADER)
    if token is None or not token.text:
        findings.add(
            Severity.ERROR,
            "mandatory description is missing",
            description="Summarise the change after the colon, e.g. 'fix: handle empty input'.",
            location=token.offset if token else len(findings.message),
        )
        return None
    return token.text


def _check_body_and_footer(
    tokens: list[Token], findings: _Findings
) -> tuple[str | None, dict[str, str] | None]:
    newline = find(tokens, TokenKind.NEWLINE)
    if newline is not None:
        findings.add(
            Severity.WARNING,
            "missing blank line between header and body",
            description="Separate the header from the body with an empty line.",
            location=newline.offset,
        )

    trailer = find(tokens, TokenKind.TRAILER)
    body, footer = split_body_and_footer(trailer.text) if trailer else (None, None)

    if footer is None:
        findings.add(
            Severity.INFO,
            "no footer found",
            description="Footers such as 'Refs: #123' link the commit to related work.",
            location=trailer.offset if trailer else len(findings.message),
        )
    return body, footer


def lint(message: str) -> LintResult:
    """Lint a commit message against the conventional commit grammar.

    Args:
        message: Raw commit message

    Returns:
        The diagnostics ordered by severity, and the parsed commit when no
        ``ERROR`` was found.

    >>> result = lint("fix(parser)!: handle trailing commas")
    >>> result.commit.breaking, result.commit.scope
    (True, 'parser')
    >>> lint("").commit is None
    True
    """
    findings = _Findings(normalize(message))

    tokens = tokenize(message)
    if tokens is None:
        findings.add(
            Severity.ERROR,
            "commit message does not follow the conventional commit format",
            description=f"Expected format:\n\n{FORMAT_HINT}",
        )
        return LintResult(commit=None, diagnostics=findings.sorted())

    type_token = _check_type(tokens, findings)
    scope = _check_scope(tokens, findings)
    header = _check_header(tokens, findings)
    body, footer = _check_body_and_footer(tokens, findings)

    commit = None
    if not findings.has_errors and type_token is not None and header is not None:
        commit_type = CommitType.from_token(type_token.text)
        commit = Commit(
            header=header,
            commit_type=commit_type,
            breaking=(
                find(tokens, TokenKind.BREAKING) is not None
                or commit_type is CommitType.BREAKING_CHANGE
            ),
            scope=scope,
            body=body,
            footer=footer,
            raw_type=type_token.text if commit_type is CommitType.OTHER else None,
        )

    return LintResult(commit=commit, diagnostics=findings.sorted())

"""Tests for the lint engine."""

from __future__ import annotations

import pytest

from coco_py.core.commit_type import CommitType
from coco_py.core.commits import Commit
from coco_py.core.lint import FORMAT_HINT, LintResult, Severity, Violation, lint


def _messages(result: LintResult, severity: Severity) -> list[str]:
    return [v.message for v in result.diagnostics if v.severity is severity]


# =============================================================================
# Structural failures
# =============================================================================


class TestStructuralFailure:
    """Messages that do not match the grammar at all."""

    def test_empty_message(self):
        """An empty message yields exactly one error and no commit."""
        result = lint("")

        assert result.commit is None
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].severity is Severity.ERROR

    def test_whitespace_only(self):
        """Whitespace is trimmed before matching."""
        result = lint("   \n\n  ")

        assert result.commit is None
        assert len(result.errors) == 1

    def test_no_separator(self):
        """A subject without a colon is rejected."""
        result = lint("Update readme")

        assert result.commit is None
        assert _messages(result, Severity.ERROR) == [
            "commit message does not follow the conventional commit format"
        ]

    def test_format_hint_in_description(self):
        """The structural error describes the expected format."""
        result = lint("just text")

        assert FORMAT_HINT in result.errors[0].description

    def test_unclosed_scope(self):
        """An opening parenthesis without a closing one is structural."""
        result = lint("feat(parser: add option")

        assert result.commit is None
        assert len(result.diagnostics) == 1

    def test_no_sub_field_checks(self):
        """Structural failure short-circuits the remaining checks."""
        result = lint("nothing to see")

        assert result.suggestions == []
        assert result.infos == []


# =============================================================================
# Field-level checks
# =============================================================================


class TestFieldChecks:
    """Type, scope and header checks."""

    def test_feature_without_scope(self):
        """A valid feature commit only gets advisory findings."""
        result = lint("feat: allow provided config object to extend other configs")

        assert result.commit == Commit(
            header="allow provided config object to extend other configs",
            commit_type=CommitType.FEATURE,
            breaking=False,
            scope=None,
            body=None,
            footer=None,
        )
        assert _messages(result, Severity.SUGGESTION) == ["consider adding a scope"]
        assert _messages(result, Severity.INFO) == ["no footer found"]
        assert len(result.diagnostics) == 2

    def test_breaking_fix_with_scope(self):
        """The ! marker sets breaking."""
        result = lint("fix(parser)!: handle trailing commas")

        assert result.commit is not None
        assert result.commit.breaking
        assert result.commit.scope == "parser"
        assert result.commit.commit_type is CommitType.FIX
        assert result.errors == []
        assert result.warnings == []

    def test_empty_scope(self):
        """Empty parentheses are an error."""
        result = lint("feat(): x")

        assert result.commit is None
        assert any(m.startswith("scope is empty") for m in _messages(result, Severity.ERROR))
        assert result.suggestions == []

    def test_whitespace_scope_is_empty(self):
        """A scope of only whitespace counts as empty."""
        result = lint("feat(  ): x")

        assert result.commit is None

    def test_missing_type(self):
        """A message starting with the colon has no type."""
        result = lint(": add option")

        assert result.commit is None
        assert "mandatory commit type is missing" in _messages(result, Severity.ERROR)

    def test_missing_header(self):
        """Nothing after the colon is an error."""
        result = lint("fix(api):")

        assert result.commit is None
        assert "mandatory description is missing" in _messages(result, Severity.ERROR)

    def test_checks_do_not_short_circuit(self):
        """Every field-level problem is reported."""
        result = lint("():")

        messages = _messages(result, Severity.ERROR)
        assert "mandatory commit type is missing" in messages
        assert "mandatory description is missing" in messages
        assert any(m.startswith("scope is empty") for m in messages)

    def test_header_is_trimmed(self):
        """The header is the trimmed text after the colon."""
        result = lint("docs:    describe setup   ")

        assert result.commit.header == "describe setup"

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("FIX: x", CommitType.FIX),
            ("Feat: x", CommitType.FEATURE),
            ("perf: x", CommitType.PERFORMANCE),
            ("ci: x", CommitType.CI),
            ("wip: x", CommitType.OTHER),
        ],
    )
    def test_type_matching_is_case_insensitive(self, message: str, expected: CommitType):
        """Type tokens map case-insensitively, unknown ones to OTHER."""
        assert lint(message).commit.commit_type is expected

    def test_unknown_type_keeps_raw_token(self):
        """The literal token is kept for OTHER commits."""
        commit = lint("wip: half done").commit

        assert commit.raw_type == "wip"
        assert commit.type_name == "wip"

    @pytest.mark.parametrize("token", ["BREAKING CHANGE", "BREAKING-CHANGE", "breaking change"])
    def test_breaking_change_type(self, token: str):
        """The BREAKING CHANGE type implies breaking."""
        commit = lint(f"{token}: drop legacy api").commit

        assert commit.commit_type is CommitType.BREAKING_CHANGE
        assert commit.breaking


# =============================================================================
# Body and footer
# =============================================================================


class TestBodyAndFooter:
    """The trailing block after the header."""

    def test_body_and_footer(self):
        """Text before the first key: value line is body."""
        result = lint(
            "fix(io): close handles\n\n"
            "Handles leaked when the reader failed.\n\n"
            "Reviewed-by: Z\n"
            "Refs: #123"
        )

        assert result.commit.body == "Handles leaked when the reader failed."
        assert result.commit.footer == {"Reviewed-by": "Z", "Refs": "#123"}
        assert result.infos == []

    def test_body_without_footer(self):
        """A body without key: value lines gives an info."""
        result = lint("feat(ui): dark mode\n\nAdds a toggle to the settings page.")

        assert result.commit.body == "Adds a toggle to the settings page."
        assert result.commit.footer is None
        assert _messages(result, Severity.INFO) == ["no footer found"]

    def test_footer_without_body(self):
        """A trailing block of only footers has no body."""
        result = lint("fix(api): retry\n\nCloses: #7")

        assert result.commit.body is None
        assert result.commit.footer == {"Closes": "#7"}

    def test_duplicate_footer_keys_last_wins(self):
        """Duplicate keys keep the last value (assumed policy)."""
        result = lint("fix(api): retry\n\nRefs: #1\nRefs: #2")

        assert result.commit.footer == {"Refs": "#2"}

    def test_missing_blank_line_is_warning(self):
        """A body directly under the header is accepted with a warning."""
        result = lint("feat(x): y\nbody text")

        assert result.commit is not None
        assert result.commit.body == "body text"
        assert _messages(result, Severity.WARNING) == [
            "missing blank line between header and body"
        ]

    def test_windows_line_endings(self):
        """CRLF line endings are normalised."""
        result = lint("fix(api): retry\r\n\r\nRefs: #9\r\n")

        assert result.commit.footer == {"Refs": "#9"}
        assert result.warnings == []

    def test_breaking_change_footer_does_not_set_breaking(self):
        """Only ! or the type mark a commit as breaking."""
        commit = lint("feat(api): new auth\n\nBREAKING CHANGE: tokens expire").commit

        assert commit.footer == {"BREAKING CHANGE": "tokens expire"}
        assert not commit.breaking


# =============================================================================
# Result helpers
# =============================================================================


class TestLintResult:
    """Tests for LintResult and Violation helpers."""

    def test_diagnostics_sorted_by_severity(self):
        """Errors come first, suggestions last."""
        result = lint("(): \nbody")

        ranks = [v.severity.rank for v in result.diagnostics]
        assert ranks == sorted(ranks)
        assert result.diagnostics[0].severity is Severity.ERROR

    def test_is_valid(self):
        """is_valid mirrors the presence of a commit."""
        assert lint("fix(a): b").is_valid
        assert not lint("").is_valid

    def test_fails_at_threshold(self):
        """Advisory findings only fail at lower thresholds."""
        result = lint("feat: x")

        assert not result.fails_at(Severity.ERROR)
        assert not result.fails_at(Severity.WARNING)
        assert result.fails_at(Severity.INFO)
        assert result.fails_at(Severity.SUGGESTION)

    def test_rejected_always_fails(self):
        """A result without a commit fails at every threshold."""
        assert lint("").fails_at(Severity.ERROR)

    def test_severity_order(self):
        """ERROR is the most urgent severity."""
        assert Severity.ERROR.is_at_least(Severity.WARNING)
        assert Severity.WARNING.is_at_least(Severity.WARNING)
        assert not Severity.SUGGESTION.is_at_least(Severity.INFO)

    def test_violation_source_excerpt(self):
        """Violations carry the text around their location."""
        result = lint("feat(): something longer")
        scope_error = result.errors[0]

        assert scope_error.location == 4
        assert "()" in scope_error.source

    def test_violation_str(self):
        """str() shows severity, message and description."""
        violation = Violation(Severity.INFO, "no footer found", description="Add one.")

        assert str(violation) == "info: no footer found\n  Add one."

    def test_commit_lint_and_parse(self):
        """Commit.lint and Commit.parse delegate to the engine."""
        assert Commit.lint("fix: x").commit == Commit.parse("fix: x")
        assert Commit.parse("broken") is None

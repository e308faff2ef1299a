"""Unit tests for tag matching."""

from __future__ import annotations

import pytest

from pr_labeller.github_labels import DEFAULT_TAGS, parse_tags
from pr_labeller.labeller.tags import match_tag


def test_vocabulary_order_wins_over_position_in_title() -> None:
    # "fix" appears first in the title, but "docs" is earlier in the vocabulary.
    assert match_tag("Fix: docs typo", ["chore", "docs", "feat", "fix"]) == "docs"


def test_match_is_case_insensitive() -> None:
    assert match_tag("FEAT: add dark mode", DEFAULT_TAGS) == "feat"


def test_match_is_substring() -> None:
    assert match_tag("Refactoring the parser", DEFAULT_TAGS) == "refactor"


@pytest.mark.parametrize("title", ["", None])
def test_empty_title_matches_nothing(title: str | None) -> None:
    assert match_tag(title, DEFAULT_TAGS) is None


def test_no_tag_in_title() -> None:
    assert match_tag("Bump version to 1.2.3", DEFAULT_TAGS) is None


def test_tags_are_patterns() -> None:
    assert match_tag("fixes #12", [r"^fix(es)?\b", "docs"]) == r"^fix(es)?\b"
    assert match_tag("hotfix for docs", [r"^fix(es)?\b", "docs"]) == "docs"


def test_first_listed_tag_wins_when_both_occur() -> None:
    assert match_tag("test: fix flaky test", ["fix", "test"]) == "fix"
    assert match_tag("test: fix flaky test", ["test", "fix"]) == "test"


def test_parse_tags_keeps_order_and_drops_blanks() -> None:
    assert parse_tags(" Chore, docs,,feat ,") == ("chore", "docs", "feat")

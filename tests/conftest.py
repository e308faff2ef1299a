"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import Mock

import pytest

from pr_labeller.labeller.github.client import GitHubClient, IssueSummary, RepoLabel


@pytest.fixture
def mock_github() -> Mock:
    """A GitHubClient fake with no labels and no closed issues."""

    github = Mock(spec=GitHubClient)
    github.repository = "octo-org/octo-repo"
    github.list_labels.return_value = []
    github.list_closed_issues.return_value = []
    github.set_issue_labels.side_effect = lambda *, issue_number, labels: list(labels)
    return github


@pytest.fixture
def serve_pages() -> Callable[[Mock, list[list[IssueSummary]]], None]:
    """Configure `list_closed_issues` to return the given pages, then empty pages."""

    def _serve(github: Mock, pages: list[list[IssueSummary]]) -> None:
        def _list_closed_issues(*, page: int, per_page: int = 100) -> list[IssueSummary]:
            if 1 <= page <= len(pages):
                return list(pages[page - 1])
            return []

        github.list_closed_issues.side_effect = _list_closed_issues

    return _serve


@pytest.fixture
def repo_labels() -> list[RepoLabel]:
    return [
        RepoLabel(name="type: chore", color="fef2c0", description=""),
        RepoLabel(name="type: docs", color="0075ca", description=""),
        RepoLabel(name="type: feature", color="a2eeef", description=""),
        RepoLabel(name="type: fix", color="d73a4a", description=""),
        RepoLabel(name="good first issue", color="7057ff", description=""),
    ]

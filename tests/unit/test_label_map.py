"""Unit tests for building the tag → label map."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests
from github import GithubException

from pr_labeller.labeller.github.client import RepoLabel
from pr_labeller.labeller.label_map import build_label_map


def _label(name: str) -> RepoLabel:
    return RepoLabel(name=name, color="ededed", description="")


def test_labels_are_classified_by_their_own_name(mock_github: Mock) -> None:
    mock_github.list_labels.return_value = [_label("docs"), _label("feature-x")]

    label_map = build_label_map(mock_github, ["docs", "feat"])

    assert dict(label_map) == {"docs": "docs", "feat": "feature-x"}


def test_unmatched_labels_and_tags_have_no_entry(
    mock_github: Mock, repo_labels: list[RepoLabel]
) -> None:
    mock_github.list_labels.return_value = repo_labels

    label_map = build_label_map(mock_github, ["chore", "docs", "feat", "fix", "style"])

    assert dict(label_map) == {
        "chore": "type: chore",
        "docs": "type: docs",
        "feat": "type: feature",
        "fix": "type: fix",
    }
    assert "style" not in label_map
    assert label_map.get("style") is None


def test_last_matching_label_wins(mock_github: Mock) -> None:
    mock_github.list_labels.return_value = [_label("fix"), _label("bugfix")]

    label_map = build_label_map(mock_github, ["fix"])

    assert label_map["fix"] == "bugfix"


def test_label_map_is_read_only(mock_github: Mock) -> None:
    mock_github.list_labels.return_value = [_label("docs")]

    label_map = build_label_map(mock_github, ["docs"])

    with pytest.raises(TypeError):
        label_map["docs"] = "other"  # type: ignore[index]


def test_all_pages_flag_is_forwarded(mock_github: Mock) -> None:
    build_label_map(mock_github, ["docs"], all_pages=False)

    mock_github.list_labels.assert_called_once_with(all_pages=False)


@pytest.mark.parametrize(
    "error",
    [
        GithubException(500, {"message": "boom"}, None),
        requests.ConnectionError("connection reset"),
    ],
)
def test_listing_failure_degrades_to_empty_map(mock_github: Mock, error: Exception) -> None:
    mock_github.list_labels.side_effect = error

    label_map = build_label_map(mock_github, ["docs"])

    assert dict(label_map) == {}

"""Translation of tags into the repository's own label names."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType

import requests
from github import GithubException

from pr_labeller.labeller.github.client import GitHubClient
from pr_labeller.labeller.tags import match_tag

logger = logging.getLogger(__name__)


def build_label_map(
    github: GitHubClient,
    tags: Sequence[str],
    *,
    all_pages: bool = True,
) -> Mapping[str, str]:
    """Map each tag to the name of a repository label that matches it.

    Labels are classified by their own name. When several labels match the same tag,
    the last one in GitHub's listing order wins. Tags without a matching label get no
    entry.

    A listing failure is logged and yields the (possibly empty) map built so far.
    The returned mapping is read-only; workers share it without locking.
    """

    label_map: dict[str, str] = {}
    try:
        labels = github.list_labels(all_pages=all_pages)
    except (GithubException, requests.RequestException):
        logger.exception(
            "Failed to list repository labels; continuing with an empty label map",
            extra={"repo": github.repository},
        )
        return MappingProxyType(label_map)

    for label in labels:
        tag = match_tag(label.name, tags)
        if tag is None:
            continue
        previous = label_map.get(tag)
        if previous is not None and previous != label.name:
            logger.debug(
                "Label replaces earlier match for tag",
                extra={"tag": tag, "previous": previous, "label": label.name},
            )
        label_map[tag] = label.name

    missing = [tag for tag in tags if tag not in label_map]
    logger.info(
        "Label map built",
        extra={"repo": github.repository, "label_map": dict(label_map), "unmapped_tags": missing},
    )
    return MappingProxyType(label_map)

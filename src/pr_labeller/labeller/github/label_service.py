"""Repository label creation.

This backs the `create` command: optionally delete every existing label, then create
each label from a labels file. Calls are sequential; a failure on one label is logged
and counted, and the remaining labels are still processed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests
from github import GithubException

from pr_labeller.github_labels import LabelSpec
from pr_labeller.labeller.github.client import GitHubClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LabelSyncResult:
    """Counts of what the `create` command did to a repository."""

    deleted: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class LabelService:
    """Create (and optionally reset) repository labels from label specs."""

    def __init__(self, *, github: GitHubClient) -> None:
        self._github = github

    def delete_existing_labels(self, result: LabelSyncResult) -> None:
        for label in self._github.list_labels(all_pages=True):
            try:
                self._github.delete_label(name=label.name)
            except (GithubException, requests.RequestException) as e:
                logger.warning(
                    "Failed to delete label",
                    extra={"label": label.name, "error": str(e)},
                )
                result.failed.append(f"delete:{label.name}")
                continue
            result.deleted.append(label.name)

    def create_labels(
        self, specs: list[LabelSpec], *, delete_existing: bool = True
    ) -> LabelSyncResult:
        """Create every label in `specs`.

        Args:
            specs: Labels to create, in file order.
            delete_existing: Delete all labels currently on the repository first.
        """

        result = LabelSyncResult()
        if delete_existing:
            self.delete_existing_labels(result)

        for spec in specs:
            try:
                self._github.create_label(spec=spec)
            except (GithubException, requests.RequestException) as e:
                logger.warning(
                    "Failed to create label",
                    extra={"label": spec.name, "error": str(e)},
                )
                result.failed.append(f"create:{spec.name}")
                continue
            result.created.append(spec.name)

        logger.info(
            "Label creation finished",
            extra={
                "repo": self._github.repository,
                "deleted": len(result.deleted),
                "created": len(result.created),
                "failed": len(result.failed),
            },
        )
        return result

"""GitHub API client wrapper.

This intentionally wraps PyGithub and a `requests.Session` to keep GitHub calls out of
the pipeline and CLI code and make tests easy.

The client is shared by all labelling workers. PyGithub handles label listing and
creation; the issue listing and label replacement calls go through the REST session so
that every worker reuses one connection pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests
from github import Auth, Github
from github.Repository import Repository
from requests.adapters import HTTPAdapter

from pr_labeller.github_labels import LabelSpec

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100


@dataclass(frozen=True, slots=True)
class IssueSummary:
    """Minimal issue metadata needed to classify and label a PR."""

    number: int
    title: str
    author: str
    is_pull_request: bool


@dataclass(frozen=True, slots=True)
class RepoLabel:
    """A label currently defined on the repository."""

    name: str
    color: str
    description: str


class GitHubClient:
    """Small wrapper around PyGithub and the REST API for the labeller's operations."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        pool_size: int = 10,
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository.strip().strip("/"):
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")
        self._rest_base_url = base_url.rstrip("/")

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
        else:
            auth = Auth.Token(token)
            self._github = github_api or Github(
                auth=auth, base_url=self._rest_base_url, per_page=DEFAULT_PER_PAGE
            )
            try:
                self._repo = self._github.get_repo(self._repository_name)
            except Exception:
                logger.error(
                    "Failed to connect to repository", extra={"repo": self._repository_name}
                )
                if github_api is None:
                    self._github.close()
                raise
            logger.info(
                "Authenticated with GitHub and connected to repository",
                extra={"repo": self._repository_name},
            )

        # Opened after the repository lookup succeeds.
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "pr-labeller",
            }
        )
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=max(1, pool_size))
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def _repo_url(self, *, path: str) -> str:
        path = path.lstrip("/")
        if not path:
            return f"{self._rest_base_url}/repos/{self._repository_name}"
        return f"{self._rest_base_url}/repos/{self._repository_name}/{path}"

    def _issues_url(self, *, issue_number: int, suffix: str = "") -> str:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        if suffix and not suffix.startswith("/"):
            suffix = "/" + suffix
        return self._repo_url(path=f"issues/{issue_number}{suffix}")

    @staticmethod
    def _safe_login(value: object) -> str:
        if isinstance(value, dict):
            login = value.get("login")
            if isinstance(login, str) and login.strip():
                return login
        return "unknown"

    @classmethod
    def _parse_issue_json(cls, data: dict[str, Any]) -> IssueSummary | None:
        number = data.get("number")
        if not isinstance(number, int) or number <= 0:
            return None

        title = data.get("title")
        if not isinstance(title, str):
            title = ""

        # The issues endpoint lists PRs too; they carry a `pull_request` object.
        return IssueSummary(
            number=number,
            title=title,
            author=cls._safe_login(data.get("user")),
            is_pull_request=data.get("pull_request") is not None,
        )

    def list_labels(self, *, all_pages: bool = True) -> list[RepoLabel]:
        """List the labels defined on the repository.

        Args:
            all_pages: Follow every page of results. When False, only the first page
                is read.
        """

        paginated = self._repo.get_labels()
        raw_labels = paginated if all_pages else paginated.get_page(0)

        labels = [
            RepoLabel(
                name=label.name,
                color=label.color or "",
                description=label.description or "",
            )
            for label in raw_labels
        ]
        logger.debug(
            "Repository labels listed",
            extra={"repo": self._repository_name, "count": len(labels), "all_pages": all_pages},
        )
        return labels

    def list_closed_issues(
        self, *, page: int, per_page: int = DEFAULT_PER_PAGE
    ) -> list[IssueSummary]:
        """Fetch one page of closed issues (PRs included), 1-indexed."""

        if page <= 0:
            raise ValueError("page must be a positive integer")

        resp = self._session.get(
            self._repo_url(path="issues"),
            params={"state": "closed", "page": page, "per_page": per_page},
            timeout=30,
        )
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, list):
            logger.warning(
                "Unexpected issues response shape; treating page as empty",
                extra={"repo": self._repository_name, "page": page},
            )
            return []

        issues: list[IssueSummary] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            parsed = self._parse_issue_json(item)
            if parsed is not None:
                issues.append(parsed)

        logger.debug(
            "Closed issues page fetched",
            extra={"repo": self._repository_name, "page": page, "count": len(issues)},
        )
        return issues

    def set_issue_labels(self, *, issue_number: int, labels: list[str]) -> list[str]:
        """Replace all labels of an issue or PR.

        Returns:
            The label names GitHub reports on the issue after the update.
        """

        normalized = [name for name in labels if name.strip()]
        if not normalized:
            raise ValueError("At least one label is required")

        url = self._issues_url(issue_number=issue_number, suffix="labels")
        resp = self._session.put(url, json={"labels": normalized}, timeout=30)
        resp.raise_for_status()

        payload = resp.json()
        returned: list[str] = []
        if isinstance(payload, list):
            for item in payload:
                if isinstance(item, dict) and isinstance(item.get("name"), str):
                    returned.append(item["name"])

        logger.debug(
            "Issue labels replaced",
            extra={
                "repo": self._repository_name,
                "issue_number": issue_number,
                "labels": returned,
            },
        )
        return returned

    def delete_label(self, *, name: str) -> None:
        if not name.strip():
            raise ValueError("Label name is required")

        url = self._repo_url(path=f"labels/{quote(name, safe='')}")
        resp = self._session.delete(url, timeout=30)
        resp.raise_for_status()
        logger.info("Label deleted", extra={"repo": self._repository_name, "label": name})

    def create_label(self, *, spec: LabelSpec) -> RepoLabel:
        label = self._repo.create_label(
            name=spec.name,
            color=spec.color.lstrip("#"),
            description=spec.description,
        )
        logger.info("Label created", extra={"repo": self._repository_name, "label": spec.name})
        return RepoLabel(
            name=label.name,
            color=label.color or "",
            description=label.description or "",
        )

    def close(self) -> None:
        self._session.close()
        if self._github is not None:
            self._github.close()

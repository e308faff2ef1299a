"""Concurrent PR labelling pipeline.

One producer thread walks the closed-issue pages in order and publishes each page onto a
bounded queue. The driver drains the queue and submits one unit of work per PR to a
bounded thread pool. Units classify the PR title, resolve the tag through the read-only
label map, replace the PR's labels, and hand their outcome to the aggregator.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor

import requests
from github import GithubException

from pr_labeller.github_labels import validate_tags
from pr_labeller.labeller.github.client import DEFAULT_PER_PAGE, GitHubClient, IssueSummary
from pr_labeller.labeller.label_map import build_label_map
from pr_labeller.labeller.results import (
    LabellingSummary,
    Outcome,
    OutcomeRecord,
    ResultAggregator,
)
from pr_labeller.labeller.tags import match_tag

logger = logging.getLogger(__name__)

Batch = list[IssueSummary]


class LabellingPipeline:
    """Label every closed PR of a repository by matching its title to a tag."""

    def __init__(
        self,
        *,
        github: GitHubClient,
        tags: Sequence[str],
        concurrency: int = 8,
        queue_size: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
        all_label_pages: bool = True,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        if not tags:
            raise ValueError("At least one tag is required")
        validate_tags(tuple(tags))

        self._github = github
        self._tags = tuple(tags)
        self._concurrency = concurrency
        self._queue_size = queue_size
        self._per_page = per_page
        self._all_label_pages = all_label_pages
        self._listing_error: BaseException | None = None

    def _produce(self, batches: queue.Queue[Batch | None]) -> None:
        """Publish closed-issue pages in order until an empty page, then close the queue.

        This is the only place the page cursor advances.
        """

        page = 1
        try:
            while True:
                issues = self._github.list_closed_issues(page=page, per_page=self._per_page)
                if not issues:
                    break
                batches.put(issues)
                page += 1
        except Exception as e:
            self._listing_error = e
            logger.exception(
                "Listing closed issues failed; stopping production",
                extra={"repo": self._github.repository, "page": page},
            )
        finally:
            batches.put(None)
            logger.debug("Issue producer finished", extra={"pages": page - 1})

    def label_issue(self, issue: IssueSummary, label_map: Mapping[str, str]) -> OutcomeRecord:
        tag = match_tag(issue.title, self._tags)
        if tag is None:
            return OutcomeRecord(issue=issue, outcome=Outcome.UNLABELLED, detail="no matching tag")

        label = label_map.get(tag)
        if not label:
            return OutcomeRecord(
                issue=issue,
                outcome=Outcome.UNLABELLED,
                tag=tag,
                detail=f"no repository label for tag {tag!r}",
            )

        try:
            self._github.set_issue_labels(issue_number=issue.number, labels=[label])
        except (GithubException, requests.RequestException) as e:
            logger.warning(
                "Failed to label PR",
                extra={"issue_number": issue.number, "label": label, "error": str(e)},
            )
            return OutcomeRecord(
                issue=issue,
                outcome=Outcome.REMOTE_ERROR,
                tag=tag,
                label=label,
                detail=str(e),
            )

        logger.debug(
            "PR labelled", extra={"issue_number": issue.number, "tag": tag, "label": label}
        )
        return OutcomeRecord(issue=issue, outcome=Outcome.LABELLED, tag=tag, label=label)

    def _run_unit(
        self,
        issue: IssueSummary,
        label_map: Mapping[str, str],
        aggregator: ResultAggregator,
    ) -> None:
        try:
            record = self.label_issue(issue, label_map)
        except Exception as e:
            logger.exception("Labelling unit failed", extra={"issue_number": issue.number})
            record = OutcomeRecord(issue=issue, outcome=Outcome.REMOTE_ERROR, detail=str(e))
        aggregator.record(record)

    def run(self) -> LabellingSummary:
        started = time.monotonic()
        self._listing_error = None

        label_map = build_label_map(self._github, self._tags, all_pages=self._all_label_pages)
        aggregator = ResultAggregator()

        batches: queue.Queue[Batch | None] = queue.Queue(maxsize=self._queue_size)
        producer = threading.Thread(
            target=self._produce,
            args=(batches,),
            name="issue-producer",
            daemon=True,
        )
        producer.start()

        submitted = 0
        # At most `concurrency` units are in flight, so the driver stops draining the
        # queue while workers are busy and the producer blocks on the full queue.
        slots = threading.BoundedSemaphore(self._concurrency)
        # Leaving the executor block waits for every submitted unit.
        with ThreadPoolExecutor(
            max_workers=self._concurrency, thread_name_prefix="labeller"
        ) as executor:
            while (batch := batches.get()) is not None:
                for issue in batch:
                    if not issue.is_pull_request:
                        continue
                    slots.acquire()
                    future = executor.submit(self._run_unit, issue, label_map, aggregator)
                    future.add_done_callback(lambda _f: slots.release())
                    submitted += 1
        producer.join()

        summary = aggregator.summarize(
            elapsed_seconds=time.monotonic() - started,
            listing_complete=self._listing_error is None,
        )
        logger.info(
            "Labelling run finished",
            extra={
                "repo": self._github.repository,
                "submitted": submitted,
                "labelled": summary.labelled_count,
                "unlabelled": len(summary.unlabelled),
                "remote_errors": len(summary.remote_errors),
                "listing_complete": summary.listing_complete,
            },
        )
        return summary

"""Per-PR labelling outcomes and their aggregation."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum

from pr_labeller.labeller.github.client import IssueSummary


class Outcome(str, Enum):
    LABELLED = "labelled"
    UNLABELLED = "unlabelled"
    REMOTE_ERROR = "remote_error"


@dataclass(frozen=True, slots=True)
class OutcomeRecord:
    """Result of attempting to classify and label one PR."""

    issue: IssueSummary
    outcome: Outcome
    tag: str | None = None
    label: str | None = None
    detail: str = ""


@dataclass(frozen=True, slots=True)
class LabellingSummary:
    """Final report of a labelling run."""

    elapsed_seconds: float
    labelled_count: int
    unlabelled: tuple[OutcomeRecord, ...]
    remote_errors: tuple[OutcomeRecord, ...]
    listing_complete: bool = True

    @property
    def ok(self) -> bool:
        return self.listing_complete and not self.remote_errors

    def render(self) -> str:
        lines = [
            f"Finished adding {self.labelled_count} labels to PRs in {self.elapsed_seconds:.2f}s"
        ]
        if not self.listing_complete:
            lines.append("Listing closed issues stopped early; some PRs were not visited.")

        lines.append("Unable to label the following PRs:")
        for record in self.unlabelled:
            lines.append(f"{record.issue.title} - {record.issue.author}")

        if self.remote_errors:
            lines.append("Failed to update the following PRs:")
            for record in self.remote_errors:
                lines.append(
                    f"#{record.issue.number} {record.issue.title} - {record.issue.author}"
                    f" ({record.detail})"
                )
        return "\n".join(lines)


class ResultAggregator:
    """Thread-safe sink for outcome records.

    Workers hand records over through `record`; the aggregator is the only owner of the
    collected state. A single lock serializes every update so no record or count is lost.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._labelled_count = 0
        self._unlabelled: list[OutcomeRecord] = []
        self._remote_errors: list[OutcomeRecord] = []

    def record(self, record: OutcomeRecord) -> None:
        with self._lock:
            if record.outcome is Outcome.LABELLED:
                self._labelled_count += 1
            elif record.outcome is Outcome.UNLABELLED:
                self._unlabelled.append(record)
            else:
                self._remote_errors.append(record)

    def summarize(
        self, *, elapsed_seconds: float, listing_complete: bool = True
    ) -> LabellingSummary:
        # Completion order is arbitrary; report by PR number.
        with self._lock:
            return LabellingSummary(
                elapsed_seconds=elapsed_seconds,
                labelled_count=self._labelled_count,
                unlabelled=tuple(sorted(self._unlabelled, key=lambda r: r.issue.number)),
                remote_errors=tuple(sorted(self._remote_errors, key=lambda r: r.issue.number)),
                listing_complete=listing_complete,
            )

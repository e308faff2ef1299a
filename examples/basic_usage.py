#!/usr/bin/env python3
"""Programmatic labelling example.

This demonstrates using the labeller components directly:

* load settings from `.env`
* build the tag → label map for a repository
* label its closed PRs and print the summary

Repository selection is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from pr_labeller.labeller.config import LabellerSettings
from pr_labeller.labeller.github.client import GitHubClient
from pr_labeller.labeller.logging import configure_logging
from pr_labeller.labeller.pipeline import LabellingPipeline


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Label closed PRs (programmatic example).")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument(
        "--concurrency",
        type=int,
        default=4,
        help="Maximum number of PRs labelled at once",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = LabellerSettings()
    configure_logging(settings.log_level)

    github = GitHubClient(
        token=settings.github_token,
        repository=args.repo,
        base_url=settings.github_base_url,
        pool_size=args.concurrency,
    )
    try:
        pipeline = LabellingPipeline(
            github=github,
            tags=settings.tag_vocabulary,
            concurrency=args.concurrency,
        )
        summary = pipeline.run()
    finally:
        github.close()

    print(summary.render())
    return 0 if summary.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())

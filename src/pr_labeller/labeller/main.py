"""CLI entrypoint for the PR labeller."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from pr_labeller import __version__
from pr_labeller.github_labels import (
    LabelsFileError,
    load_label_specs,
    parse_tags,
    validate_tags,
)
from pr_labeller.labeller.config import LabellerSettings
from pr_labeller.labeller.github.client import GitHubClient
from pr_labeller.labeller.github.label_service import LabelService
from pr_labeller.labeller.logging import configure_logging
from pr_labeller.labeller.pipeline import LabellingPipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pr-labeller",
        description="Label closed GitHub PRs by matching their titles to category tags",
    )
    parser.add_argument("--version", action="version", version=f"pr-labeller {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    label = subparsers.add_parser(
        "label",
        help="Add labels to closed PRs by matching each PR title to a tag",
    )
    label.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        required=True,
        help="Target repository in the form 'owner/repo'",
    )
    label.add_argument(
        "--tags",
        default=None,
        help="Comma-separated tag vocabulary in match order (overrides LABELLER_TAGS)",
    )
    label.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Maximum number of PRs labelled at once (overrides LABELLER_CONCURRENCY)",
    )
    label.add_argument(
        "--first-label-page-only",
        action="store_true",
        help="Only read the first page of repository labels when building the label map",
    )

    create = subparsers.add_parser(
        "create",
        help="Add labels to a repository from a JSON file of name/color/description",
    )
    create.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        required=True,
        help="Target repository in the form 'owner/repo'",
    )
    create.add_argument(
        "--labels",
        default=None,
        help="JSON file of labels to create (overrides LABELS_FILE, default labels.json)",
    )
    create.add_argument(
        "--no-delete",
        action="store_true",
        help="Keep the repository's existing labels instead of deleting them first",
    )

    return parser


def _run_label(args: argparse.Namespace, settings: LabellerSettings) -> int:
    tags = parse_tags(args.tags) if args.tags is not None else settings.tag_vocabulary
    if not tags:
        print("At least one tag is required", file=sys.stderr)
        return 2
    try:
        validate_tags(tags)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    concurrency = args.concurrency if args.concurrency is not None else settings.concurrency
    if concurrency < 1:
        print("--concurrency must be at least 1", file=sys.stderr)
        return 2

    github = GitHubClient(
        token=settings.github_token,
        repository=args.repository,
        base_url=settings.github_base_url,
        pool_size=concurrency,
    )
    try:
        pipeline = LabellingPipeline(
            github=github,
            tags=tags,
            concurrency=concurrency,
            queue_size=settings.queue_size,
            all_label_pages=not args.first_label_page_only,
        )
        summary = pipeline.run()
    finally:
        github.close()

    print(summary.render())
    if not summary.ok:
        return 5
    return 0


def _run_create(args: argparse.Namespace, settings: LabellerSettings) -> int:
    labels_file = Path(args.labels) if args.labels is not None else settings.labels_file

    # Validate the file before touching the repository's existing labels.
    try:
        specs = load_label_specs(labels_file)
    except LabelsFileError as e:
        logger.error(str(e), extra={"path": str(e.path)})
        print(str(e), file=sys.stderr)
        return 2

    github = GitHubClient(
        token=settings.github_token,
        repository=args.repository,
        base_url=settings.github_base_url,
    )
    try:
        service = LabelService(github=github)
        result = service.create_labels(specs, delete_existing=not args.no_delete)
    finally:
        github.close()

    print(f"Added {len(result.created)} labels from {labels_file} to {args.repository}")
    if result.deleted:
        print(f"Deleted {len(result.deleted)} existing labels")
    if not result.ok:
        print(f"Failed operations: {', '.join(result.failed)}", file=sys.stderr)
        return 4
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = LabellerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "label":
            return _run_label(args, settings)

        if args.command == "create":
            return _run_create(args, settings)

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

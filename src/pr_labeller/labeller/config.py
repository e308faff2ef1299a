"""Configuration for the PR labeller.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The GitHub token is read from `GITHUB_AUTH`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_labeller.github_labels import DEFAULT_TAGS, parse_tags, validate_tags


class LabellerSettings(BaseSettings):
    """Settings for the labeller.

    Environment variables:
    - GITHUB_AUTH
    - GITHUB_BASE_URL       (optional)
    - LOG_LEVEL             (optional)
    - LABELLER_TAGS         (optional, comma-separated, order matters)
    - LABELLER_CONCURRENCY  (optional)
    - LABELLER_QUEUE_SIZE   (optional)
    - LABELS_FILE           (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `LabellerSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias="GITHUB_AUTH",
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    tags: str = Field(
        default=",".join(DEFAULT_TAGS),
        validation_alias="LABELLER_TAGS",
        description="Ordered, comma-separated tag vocabulary; the first match wins",
    )
    concurrency: int = Field(
        default=8,
        ge=1,
        validation_alias="LABELLER_CONCURRENCY",
        description="Maximum number of PRs labelled at the same time",
    )
    queue_size: int = Field(
        default=1,
        ge=1,
        validation_alias="LABELLER_QUEUE_SIZE",
        description="Number of issue pages buffered between the producer and the workers",
    )

    labels_file: Path = Field(
        default=Path("labels.json"),
        validation_alias="LABELS_FILE",
        description="JSON file of labels used by the `create` command",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> LabellerSettings:
        if not self.github_token.strip():
            raise ValueError("GITHUB_AUTH is required")
        if not self.tag_vocabulary:
            raise ValueError("LABELLER_TAGS must name at least one tag")
        validate_tags(self.tag_vocabulary)
        return self

    @property
    def tag_vocabulary(self) -> tuple[str, ...]:
        """Tags in match order."""

        return parse_tags(self.tags)

"""Shared GitHub label conventions.

The tag vocabulary is the ordered list of category tokens matched against PR titles.
Label specs describe the labels the `create` command adds to a repository; they are
loaded from a JSON file of `{name, color, description}` objects.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

DEFAULT_TAGS: tuple[str, ...] = (
    "chore",
    "docs",
    "feat",
    "fix",
    "refactor",
    "style",
    "test",
)


class LabelSpec(BaseModel):
    name: str = Field(min_length=1)
    color: str = Field(default="ededed")
    description: str = Field(default="")


class LabelsFileError(Exception):
    """Raised when a labels file cannot be read or does not contain label specs."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid labels file {path}: {reason}")
        self.path = path
        self.reason = reason


_LABEL_SPECS_ADAPTER = TypeAdapter(list[LabelSpec])


def load_label_specs(path: Path) -> list[LabelSpec]:
    """Read and validate a JSON labels file.

    Raises:
        LabelsFileError: if the file is missing, unreadable, not JSON, or has the wrong shape.
    """

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LabelsFileError(path, f"cannot read file ({e.strerror or e})") from e
    except json.JSONDecodeError as e:
        raise LabelsFileError(path, f"not valid JSON ({e.msg} at line {e.lineno})") from e

    try:
        return _LABEL_SPECS_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise LabelsFileError(path, f"{e.error_count()} validation error(s)") from e


def parse_tags(value: str) -> tuple[str, ...]:
    """Split a comma-separated tag list, keeping order and dropping blanks."""

    parts = [p.strip().lower() for p in value.split(",")]
    return tuple(p for p in parts if p)


def validate_tags(tags: tuple[str, ...]) -> tuple[str, ...]:
    """Check that every tag compiles as a regular expression.

    Raises:
        ValueError: naming the first tag that is not a valid pattern.
    """

    for tag in tags:
        try:
            re.compile(tag)
        except re.error as e:
            raise ValueError(f"Invalid tag pattern {tag!r}: {e}") from e
    return tags

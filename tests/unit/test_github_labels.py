"""Unit tests for labels file loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pr_labeller.github_labels import (
    LabelsFileError,
    LabelSpec,
    load_label_specs,
    validate_tags,
)


def test_load_label_specs_fills_defaults(tmp_path: Path) -> None:
    path = tmp_path / "labels.json"
    path.write_text(
        json.dumps(
            [
                {"name": "feat", "color": "a2eeef", "description": "New feature"},
                {"name": "chore"},
            ]
        ),
        encoding="utf-8",
    )

    specs = load_label_specs(path)

    assert specs == [
        LabelSpec(name="feat", color="a2eeef", description="New feature"),
        LabelSpec(name="chore", color="ededed", description=""),
    ]


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(LabelsFileError, match="cannot read file"):
        load_label_specs(tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "labels.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(LabelsFileError, match="not valid JSON"):
        load_label_specs(path)


@pytest.mark.parametrize("payload", [{"name": "feat"}, [{"color": "fff"}], [{"name": ""}]])
def test_wrong_shape_raises(tmp_path: Path, payload: object) -> None:
    path = tmp_path / "labels.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(LabelsFileError, match="validation error"):
        load_label_specs(path)


def test_validate_tags_accepts_patterns() -> None:
    assert validate_tags(("fix", r"feat(ure)?", "docs?")) == ("fix", r"feat(ure)?", "docs?")


def test_validate_tags_names_the_bad_pattern() -> None:
    with pytest.raises(ValueError, match=r"Invalid tag pattern '\[wip'"):
        validate_tags(("fix", "[wip", "docs"))

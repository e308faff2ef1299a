"""Tag matching for PR titles and label names."""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache


@lru_cache(maxsize=256)
def _compile(tag: str) -> re.Pattern[str]:
    return re.compile(tag)


def match_tag(text: str | None, tags: Sequence[str]) -> str | None:
    """Return the first tag in `tags` whose pattern occurs in the lower-cased text.

    Each tag is searched as a regular expression, so a plain word matches anywhere in
    the text. Vocabulary order is the only tie-break: a title matching several tags
    gets the earliest-listed one, regardless of where the matches sit in the text.

    Returns:
        The matching tag, or None when no tag matches (including for empty text).
    """

    if not text:
        return None

    lowered = text.lower()
    for tag in tags:
        if _compile(tag).search(lowered):
            return tag
    return None

"""Extraction and calculation of revision numbers from registry tags."""

from __future__ import annotations

from typing import Iterable

from .errors import NoVersionTag
from .strategy import PaddingStrategy

SEPARATOR = "-"


def extract_revision(tag: str, version: str) -> int:
    """
    Reads the revision embedded after the last '-' of a tag.

    The bare version, a tag without separator and a suffix that is not a
    plain decimal number all count as revision 0.
    """
    if not tag or tag == version:
        return 0

    _, sep, suffix = tag.rpartition(SEPARATOR)
    if not sep:
        return 0

    if not (suffix.isascii() and suffix.isdigit()):
        return 0
    return int(suffix)


def next_revision(tags: Iterable[str], version: str, strategy: PaddingStrategy) -> str:
    """Returns `<version>-<padded max+1>` for the tags that start with the version."""
    matching = [tag for tag in tags if tag.startswith(version)]
    if not matching:
        raise NoVersionTag(f"No version tag found for version: {version}")

    latest = max(extract_revision(tag, version) for tag in matching)
    return f"{version}{SEPARATOR}{strategy.render(latest + 1)}"

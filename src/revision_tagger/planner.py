"""The Planner transforms the user configuration into a list of index-tagged ImageTasks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .config import RevisionConfig
from .reference import ImageReference


@dataclass(frozen=True)
class ImageTask:
    """
    One image to process, tagged with its position in the input list.
    The index is what correlates a completed task back to its output slot.
    """

    index: int
    reference: ImageReference
    prior_digest: Optional[str] = None


def align_digests(count: int, digests: Optional[Sequence[Optional[str]]]) -> List[Optional[str]]:
    """Pads or truncates prior digests to `count` entries; blanks become None."""
    digests = list(digests or [])[:count]
    digests += [None] * (count - len(digests))
    return [digest or None for digest in digests]


def plan_tasks(
    images: Sequence[Union[str, ImageReference]],
    digests: Optional[Sequence[Optional[str]]] = None,
) -> List[ImageTask]:
    """
    Parses every image reference and pairs it with its prior digest.
    Parsing happens for the whole list before any task runs, so a missing
    version fails the invocation without touching the registry.
    """
    aligned = align_digests(len(images), digests)
    return [
        ImageTask(
            index=index,
            reference=image if isinstance(image, ImageReference) else ImageReference.parse(image),
            prior_digest=digest,
        )
        for index, (image, digest) in enumerate(zip(images, aligned))
    ]


class Planner:
    """Orchestrates the resolution of the configured images into tasks."""

    def __init__(self, config: RevisionConfig):
        self.config = config

    def plan(self) -> List[ImageTask]:
        return plan_tasks(self.config.images, self.config.digests)

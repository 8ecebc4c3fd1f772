"""Error taxonomy for revision resolution."""

from __future__ import annotations

from typing import Optional


class RevisionError(Exception):
    """Base class for every fatal condition raised while resolving revisions."""

    def __init__(self, message: str, image: Optional[str] = None):
        super().__init__(message)
        self.image = image


class InvalidStrategy(RevisionError, ValueError):
    """The padding strategy descriptor could not be parsed."""


class MissingVersion(RevisionError, ValueError):
    """The image reference has no version component."""


class DigestNotFound(RevisionError):
    """The registry returned no digest for the image."""


class NoVersionTag(RevisionError):
    """No existing tag starts with the image version."""


class ListFailed(RevisionError):
    """Listing the repository tags failed."""


class PublishFailed(RevisionError):
    """Creating the revision tag failed."""

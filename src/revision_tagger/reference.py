"""Parsing of `repository:version` image references."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import MissingVersion


@dataclass(frozen=True)
class ImageReference:
    repository: str
    version: str

    @classmethod
    def parse(cls, image: str) -> ImageReference:
        """Splits an image on the first ':' into repository and version."""
        repository, sep, version = image.strip().partition(":")
        if not sep or not version:
            raise MissingVersion(f"No version specified in image: {image}", image=image)
        return cls(repository=repository, version=version)

    def tagged(self, tag: str) -> str:
        return f"{self.repository}:{tag}"

    def __str__(self) -> str:
        return self.tagged(self.version)

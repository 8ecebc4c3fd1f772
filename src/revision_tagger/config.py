"""Configuration schema for revision-tagger using Pydantic."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator


class InspectorType(str, Enum):
    """Supported backends for reading the current image digest."""

    SKOPEO = "skopeo"
    DOCKER = "docker"


class PlatformOverride(BaseModel):
    """Platform selection used when inspecting multi-platform images."""

    os: Optional[str] = None
    """Operating system override (e.g., 'linux')."""

    arch: Optional[str] = None
    """Architecture override (e.g., 'arm64')."""

    variant: Optional[str] = None
    """Architecture variant override (e.g., 'v8')."""

    @field_validator("os", "arch", "variant", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def is_empty(self) -> bool:
        return not (self.os or self.arch or self.variant)

    def platform(self) -> Optional[str]:
        """Returns the platform in 'os/arch[/variant]' form, if any override is set."""
        if self.is_empty():
            return None
        parts = [self.os or "linux", self.arch or "amd64"]
        if self.variant:
            parts.append(self.variant)
        return "/".join(parts)


class RevisionConfig(BaseModel):
    """Root configuration object for a revision-tagger invocation."""

    images: List[str] = Field(min_length=1)
    """Images to check, each in 'repository:version' form."""

    digests: List[Optional[str]] = Field(default_factory=list)
    """Previously recorded digests aligned with `images`. May be shorter."""

    strategy: str = ""
    """Padding strategy descriptor: '', 'numerical', 'alphabetical' or 'alphabetical:<width>'."""

    platform: PlatformOverride = Field(default_factory=PlatformOverride)
    """Platform overrides applied when inspecting every image."""

    concurrency: Optional[int] = Field(default=None, gt=0)
    """Maximum number of images processed in parallel. Defaults to one per image."""

    inspector: InspectorType = InspectorType.SKOPEO
    """Backend used to read the current digest."""

    builder: Optional[str] = None
    """Name of the buildx builder instance used for publishing tags."""

    single: bool = False
    """Whether the invocation uses single-image inputs and outputs."""

    @field_validator("digests", mode="before")
    @classmethod
    def _normalize_digests(cls, value):
        if value is None:
            return []
        return [(digest.strip() or None) if isinstance(digest, str) else digest for digest in value]

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> RevisionConfig:
        """Loads and validates a RevisionConfig from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

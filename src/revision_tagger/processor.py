"""Per-image workflow: inspect, compare, list tags, compute revision, publish."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Union

from .config import PlatformOverride
from .errors import DigestNotFound, ListFailed, NoVersionTag, PublishFailed, RevisionError
from .reference import ImageReference
from .revision import next_revision
from .strategy import PaddingStrategy, parse_strategy


class DigestInspector(Protocol):
    def inspect_digest(
        self, reference: ImageReference, platform: PlatformOverride
    ) -> Optional[str]: ...


class TagLister(Protocol):
    def list_tags(self, repository: str) -> Iterable[str]: ...


class TagPublisher(Protocol):
    def publish_tag(self, repository: str, source_version: str, new_tag: str) -> None: ...


@dataclass(frozen=True)
class RevisionResult:
    """Outcome for one image. `revision_tag` is None exactly when the digest is unchanged."""

    image: ImageReference
    prior_digest: Optional[str]
    new_digest: str
    revision_tag: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.revision_tag is not None


class ImageProcessor:
    """
    Resolves and publishes the next revision tag for a single image.

    The three registry operations are injected so the workflow itself has no
    I/O of its own. Every failure is raised as a RevisionError subclass naming
    the offending image.
    """

    def __init__(self, inspector: DigestInspector, lister: TagLister, publisher: TagPublisher):
        self.inspector = inspector
        self.lister = lister
        self.publisher = publisher

    def process(
        self,
        image: Union[str, ImageReference],
        prior_digest: Optional[str] = None,
        strategy: Union[str, PaddingStrategy] = "",
        platform: Optional[PlatformOverride] = None,
    ) -> RevisionResult:
        """
        Checks one image and publishes its next revision when the digest changed.

        The revision tag is created from `repository:version`, not from the
        inspected digest. If the version tag is moved between inspection and
        publishing, the new tag follows the moved tag rather than `new_digest`.
        """
        if not isinstance(strategy, PaddingStrategy):
            strategy = parse_strategy(strategy)
        reference = image if isinstance(image, ImageReference) else ImageReference.parse(image)
        platform = platform or PlatformOverride()
        prior_digest = prior_digest or None

        try:
            digest = self.inspector.inspect_digest(reference, platform)
        except RevisionError:
            raise
        except Exception as e:
            raise DigestNotFound(
                f"Failed to inspect image {reference}: {e}", image=str(reference)
            ) from e
        if not digest:
            raise DigestNotFound(f"No existing digest found for image: {reference}", image=str(reference))

        if digest == prior_digest:
            return RevisionResult(image=reference, prior_digest=prior_digest, new_digest=digest)

        revision = self._next_revision(reference, strategy)
        try:
            self.publisher.publish_tag(reference.repository, reference.version, revision)
        except RevisionError:
            raise
        except Exception as e:
            raise PublishFailed(
                f"Failed to tag image {reference} with revision {revision}: {e}", image=str(reference)
            ) from e

        return RevisionResult(
            image=reference, prior_digest=prior_digest, new_digest=digest, revision_tag=revision
        )

    def _next_revision(self, reference: ImageReference, strategy: PaddingStrategy) -> str:
        try:
            tags = list(self.lister.list_tags(reference.repository))
        except RevisionError:
            raise
        except Exception as e:
            raise ListFailed(
                f"Failed to list tags for image {reference}: {e}", image=str(reference)
            ) from e

        try:
            return next_revision(tags, reference.version, strategy)
        except NoVersionTag as e:
            raise NoVersionTag(f"No version tag found for image: {reference}", image=str(reference)) from e

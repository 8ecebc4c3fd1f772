import threading
import time

import pytest

from revision_tagger.errors import ListFailed
from revision_tagger.processor import ImageProcessor


class FakeRegistry:
    """In-memory stand-in for the digest inspector, tag lister and tag publisher."""

    def __init__(self, digests=None, tags=None, delays=None):
        self.digests = dict(digests or {})
        self.tags = {repo: list(values) for repo, values in (tags or {}).items()}
        self.delays = dict(delays or {})
        self.calls = []
        self.published = []
        self.completed = []
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def inspect_digest(self, reference, platform):
        self._record("inspect", str(reference), platform)
        time.sleep(self.delays.get(str(reference), 0))
        with self._lock:
            self.completed.append(str(reference))
        return self.digests.get(str(reference))

    def list_tags(self, repository):
        self._record("list", repository)
        if repository not in self.tags:
            raise ListFailed(f"unknown repository {repository}", image=repository)
        return list(self.tags[repository])

    def publish_tag(self, repository, source_version, new_tag):
        self._record("publish", repository, source_version, new_tag)
        with self._lock:
            self.published.append(f"{repository}:{new_tag}")
            self.tags.setdefault(repository, []).append(new_tag)

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def registry():
    return FakeRegistry(
        digests={
            "app:1.0.0": "sha256:43",
            "app:2.0.0": "sha256:52",
            "web:1.0.0": "sha256:77",
        },
        tags={
            "app": ["1.0.0", "1.0.0-001", "2.0.0"],
            "web": ["1.0.0"],
        },
    )


@pytest.fixture
def processor(registry):
    return ImageProcessor(inspector=registry, lister=registry, publisher=registry)

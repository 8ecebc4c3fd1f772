"""Digest lookup through the Docker Engine's distribution API."""

from __future__ import annotations

from typing import Optional

import docker
from docker.errors import DockerException

from ..config import PlatformOverride
from ..reference import ImageReference


def docker_client():
    return docker.from_env()


class DockerInspector:
    """
    Reads the registry digest of an image with the Docker SDK.

    The engine resolves the digest through the registry, so the image does
    not need to be pulled. Unlike skopeo it always reports the digest of the
    top-level manifest; platform overrides only check that the platform exists.
    """

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = docker_client()
        return self._client

    def inspect_digest(
        self, reference: ImageReference, platform: Optional[PlatformOverride] = None
    ) -> Optional[str]:
        try:
            data = self.client.images.get_registry_data(str(reference))
        except DockerException as e:
            print(f"Docker registry lookup failed for {reference}: {e}")
            return None

        if platform is not None and not platform.is_empty():
            if not data.has_platform(platform.platform()):
                print(f"Image {reference} has no platform {platform.platform()}")
                return None

        return data.id or None

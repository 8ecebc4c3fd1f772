"""Wrapper for creating registry tags via 'docker buildx imagetools'."""

from __future__ import annotations

import subprocess
from typing import Optional

from ..errors import PublishFailed


class ImagetoolsPublisher:
    """
    Creates a new tag for an existing image directly in the registry.

    'imagetools create' copies the manifest (or manifest list) of the source
    reference, so every platform behind the version is carried to the new tag.
    """

    def __init__(self, buildx_instance: Optional[str] = None):
        self.buildx_instance = buildx_instance

    def publish_tag(self, repository: str, source_version: str, new_tag: str) -> None:
        cmd = ["docker", "buildx", "imagetools", "create"]

        if self.buildx_instance:
            cmd += ["--builder", self.buildx_instance]

        cmd.append(f"{repository}:{source_version}")
        cmd += ["--tag", f"{repository}:{new_tag}"]

        print(f"Executing: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except (OSError, subprocess.CalledProcessError) as e:
            detail = getattr(e, "stderr", None) or str(e)
            raise PublishFailed(
                f"Failed to tag {repository}:{source_version} as {new_tag}: {detail.strip()}",
                image=f"{repository}:{source_version}",
            ) from e

"""Wrapper for querying remote registries via the skopeo CLI."""

from __future__ import annotations

import json
import subprocess
from typing import List, Optional

from ..config import PlatformOverride
from ..errors import ListFailed
from ..reference import ImageReference


class SkopeoClient:
    """Reads digests and tag lists from a registry with 'skopeo inspect' and 'skopeo list-tags'."""

    def __init__(self, executable: str = "skopeo"):
        self.executable = executable

    def inspect_digest(
        self, reference: ImageReference, platform: Optional[PlatformOverride] = None
    ) -> Optional[str]:
        """
        Returns the digest of the image, or None when the registry can't resolve it.

        Platform overrides select a single entry of a multi-platform manifest list.
        """
        cmd = [self.executable]
        if platform is not None:
            if platform.os:
                cmd.append(f"--override-os={platform.os}")
            if platform.arch:
                cmd.append(f"--override-arch={platform.arch}")
            if platform.variant:
                cmd.append(f"--override-variant={platform.variant}")
        cmd += ["inspect", "--format", "{{.Digest}}", f"docker://{reference}"]

        try:
            result = self._run(cmd)
        except (OSError, subprocess.CalledProcessError) as e:
            print(f"skopeo inspect failed for {reference}: {_stderr(e)}")
            return None

        return result.stdout.strip() or None

    def list_tags(self, repository: str) -> List[str]:
        cmd = [self.executable, "list-tags", f"docker://{repository}"]

        try:
            result = self._run(cmd)
        except (OSError, subprocess.CalledProcessError) as e:
            raise ListFailed(
                f"Failed to list tags for {repository}: {_stderr(e)}", image=repository
            ) from e

        try:
            tags = json.loads(result.stdout)["Tags"]
        except (ValueError, KeyError, TypeError) as e:
            raise ListFailed(
                f"Unexpected list-tags output for {repository}: {e}", image=repository
            ) from e
        return list(tags or [])

    def _run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        print(f"Executing: {' '.join(cmd)}")
        return subprocess.run(cmd, check=True, capture_output=True, text=True)


def _stderr(error: Exception) -> str:
    if isinstance(error, subprocess.CalledProcessError) and error.stderr:
        return error.stderr.strip()
    return str(error)

"""Named outputs and log grouping for the hosting CI runner."""

from __future__ import annotations

import json
import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

import click

from ..batch import BatchResult

OUTPUT_ENV = "GITHUB_OUTPUT"


class OutputWriter:
    """
    Collects named outputs and writes them for the runner.

    Outputs are appended to the file named by $GITHUB_OUTPUT using the
    multiline `name<<delimiter` syntax, and optionally dumped as JSON.
    """

    def __init__(
        self,
        output_file: Optional[Union[str, Path]] = None,
        json_path: Optional[Path] = None,
    ):
        if output_file is None:
            output_file = os.environ.get(OUTPUT_ENV) or None
        self.output_file = Path(output_file) if output_file else None
        self.json_path = json_path
        self.outputs: Dict[str, str] = {}

    def set_output(self, name: str, value) -> None:
        if not isinstance(value, str):
            value = json.dumps(value)
        self.outputs[name] = value

    def add_result(self, result: BatchResult, single: bool = False) -> None:
        """Records `digest`/`revision` for one image, or `digests`/`revisions` for a batch."""
        if single:
            entry = result.results[0]
            self.set_output("digest", entry.new_digest)
            if entry.revision_tag is not None:
                self.set_output("revision", entry.revision_tag)
        else:
            self.set_output("digests", result.digests)
            self.set_output("revisions", result.revisions)

    def save(self) -> None:
        if self.output_file is not None:
            with open(self.output_file, "a") as f:
                for name, value in self.outputs.items():
                    delimiter = f"ghadelimiter_{uuid.uuid4()}"
                    f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

        if self.json_path is not None:
            self.json_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.json_path, "w") as f:
                json.dump({"outputs": self.outputs}, f, indent=2)
            click.echo(f"Outputs saved to: {self.json_path}")


@contextmanager
def group(title: str) -> Iterator[None]:
    """Folds everything echoed inside the block into a collapsible log group."""
    click.echo(f"::group::{title}")
    try:
        yield
    finally:
        click.echo("::endgroup::")

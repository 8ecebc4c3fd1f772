"""Markdown job summary rendering for revision results."""

from __future__ import annotations

import os
from typing import Optional

from jinja2 import Template

from ..batch import BatchResult

SUMMARY_ENV = "GITHUB_STEP_SUMMARY"

SUMMARY_TEMPLATE = """\
### Image revisions

| Image | Prior digest | Digest | Revision |
| --- | --- | --- | --- |
{% for result in results -%}
| `{{ result.image }}` | {{ short(result.prior_digest) }} | {{ short(result.new_digest) }} | {% if result.revision_tag %}`{{ result.image.tagged(result.revision_tag) }}`{% else %}unchanged{% endif %} |
{% endfor %}
{{ changed }} of {{ results | length }} image(s) received a new revision.
"""


def short_digest(digest: Optional[str], length: int = 12) -> str:
    """Abbreviates 'sha256:<hex>' to the algorithm plus the first hex characters."""
    if not digest:
        return "-"
    algorithm, sep, value = digest.partition(":")
    if not sep:
        return f"`{digest[:length]}`"
    return f"`{algorithm}:{value[:length]}`"


class SummaryRenderer:
    """Renders a BatchResult as a Markdown table."""

    def __init__(self, template: Optional[str] = None):
        self.template = Template(template or SUMMARY_TEMPLATE)

    def render(self, result: BatchResult) -> str:
        return self.template.render(
            results=result.results,
            changed=sum(1 for entry in result.results if entry.changed),
            short=short_digest,
        )

    def append(self, result: BatchResult, path: Optional[str] = None) -> bool:
        """Appends the summary to $GITHUB_STEP_SUMMARY. Returns False when there is nowhere to write."""
        path = path or os.environ.get(SUMMARY_ENV)
        if not path:
            return False
        with open(path, "a") as f:
            f.write(self.render(result) + "\n")
        return True

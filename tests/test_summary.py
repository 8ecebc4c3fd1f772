from revision_tagger.batch import BatchResult
from revision_tagger.exporters.summary import SummaryRenderer, short_digest
from revision_tagger.processor import RevisionResult
from revision_tagger.reference import ImageReference


def make_result():
    return BatchResult(
        results=[
            RevisionResult(ImageReference("app", "1.0.0"), None, "sha256:0123456789abcdef", "1.0.0-001"),
            RevisionResult(ImageReference("web", "2.0.0"), "sha256:77", "sha256:77"),
        ]
    )


def test_short_digest():
    assert short_digest("sha256:0123456789abcdef") == "`sha256:0123456789ab`"
    assert short_digest(None) == "-"
    assert short_digest("opaque") == "`opaque`"


def test_render_summary():
    summary = SummaryRenderer().render(make_result())

    assert "| Image | Prior digest | Digest | Revision |" in summary
    assert "| `app:1.0.0` | - | `sha256:0123456789ab` | `app:1.0.0-001` |" in summary
    assert "| `web:2.0.0` | `sha256:77` | `sha256:77` | unchanged |" in summary
    assert "1 of 2 image(s) received a new revision." in summary


def test_append_summary(tmp_path, monkeypatch):
    summary_file = tmp_path / "summary.md"
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary_file))

    assert SummaryRenderer().append(make_result()) is True
    assert "### Image revisions" in summary_file.read_text()


def test_append_without_target(monkeypatch):
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)

    assert SummaryRenderer().append(make_result()) is False

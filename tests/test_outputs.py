import json
import re

from revision_tagger.batch import BatchResult
from revision_tagger.exporters.outputs import OutputWriter, group
from revision_tagger.processor import RevisionResult
from revision_tagger.reference import ImageReference


def make_result():
    return BatchResult(
        results=[
            RevisionResult(ImageReference("app", "1.0.0"), "sha256:42", "sha256:43", "1.0.0-002"),
            RevisionResult(ImageReference("web", "1.0.0"), "sha256:77", "sha256:77"),
        ]
    )


def read_outputs(path):
    pattern = re.compile(r"^(\w+)<<(ghadelimiter_[\w-]+)\n(.*?)\n\2$", re.MULTILINE | re.DOTALL)
    return {name: value for name, _, value in pattern.findall(path.read_text())}


def test_batch_outputs(tmp_path):
    output_file = tmp_path / "github_output"
    writer = OutputWriter(output_file=output_file)

    writer.add_result(make_result())
    writer.save()

    outputs = read_outputs(output_file)
    assert json.loads(outputs["digests"]) == ["sha256:43", "sha256:77"]
    assert json.loads(outputs["revisions"]) == ["1.0.0-002", None]


def test_single_outputs(tmp_path):
    output_file = tmp_path / "github_output"
    writer = OutputWriter(output_file=output_file)

    writer.add_result(BatchResult(results=make_result().results[:1]), single=True)
    writer.save()

    assert read_outputs(output_file) == {"digest": "sha256:43", "revision": "1.0.0-002"}


def test_single_output_without_revision(tmp_path):
    output_file = tmp_path / "github_output"
    writer = OutputWriter(output_file=output_file)

    writer.add_result(BatchResult(results=make_result().results[1:]), single=True)
    writer.save()

    assert read_outputs(output_file) == {"digest": "sha256:77"}


def test_output_file_from_environment(tmp_path, monkeypatch):
    output_file = tmp_path / "github_output"
    output_file.write_text("existing<<EOF\nvalue\nEOF\n")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    writer = OutputWriter()
    writer.set_output("digest", "sha256:1")
    writer.save()

    content = output_file.read_text()
    assert content.startswith("existing<<EOF\nvalue\nEOF\n")
    assert read_outputs(output_file)["digest"] == "sha256:1"


def test_json_outputs(tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    json_path = tmp_path / "out" / "result.json"
    writer = OutputWriter(json_path=json_path)

    writer.add_result(make_result())
    writer.save()

    data = json.loads(json_path.read_text())
    assert json.loads(data["outputs"]["revisions"]) == ["1.0.0-002", None]


def test_group_markers(capsys):
    with group("app:1.0.0"):
        print("inside")

    assert capsys.readouterr().out == "::group::app:1.0.0\ninside\n::endgroup::\n"

import pytest

from revision_tagger.config import RevisionConfig
from revision_tagger.errors import MissingVersion
from revision_tagger.planner import ImageTask, Planner, align_digests, plan_tasks
from revision_tagger.reference import ImageReference


def test_planner_creates_index_tagged_tasks():
    config = RevisionConfig(
        images=["app:1.0.0", "app:2.0.0", "web:1.0.0"],
        digests=["sha256:1", ""],
    )

    tasks = Planner(config).plan()

    assert tasks == [
        ImageTask(0, ImageReference("app", "1.0.0"), "sha256:1"),
        ImageTask(1, ImageReference("app", "2.0.0"), None),
        ImageTask(2, ImageReference("web", "1.0.0"), None),
    ]


def test_planner_rejects_missing_version():
    config = RevisionConfig(images=["app:1.0.0", "web"])

    with pytest.raises(MissingVersion) as exc:
        Planner(config).plan()
    assert exc.value.image == "web"


def test_align_digests():
    assert align_digests(3, None) == [None, None, None]
    assert align_digests(2, ["a", "", "c"]) == ["a", None]
    assert align_digests(0, ["a"]) == []


def test_plan_tasks_accepts_parsed_references():
    ref = ImageReference("app", "1.0.0")
    assert plan_tasks([ref], ["sha256:1"]) == [ImageTask(0, ref, "sha256:1")]

import json
from datetime import date

import pytest

from rangereport.core.errors import SnapshotError
from rangereport.snapshot import load_snapshot, parse_snapshot


def test_plain_shape_merges_archive():
    data = {
        "tasks": [
            {"id": "t1", "title": "Active", "isDone": False},
            {"id": "t2", "title": "Other", "isDone": False},
        ],
        "archivedTasks": [{"id": "t1", "title": "Archived", "isDone": True}],
        "projects": [{"id": "p1", "title": "Work"}],
    }
    tasks, projects = parse_snapshot(data)
    assert [t.id for t in tasks] == ["t1", "t2"]
    assert tasks[0].title == "Archived"
    assert tasks[0].is_done is True
    assert [p.title for p in projects] == ["Work"]


def test_entity_state_shape():
    data = {
        "task": {
            "ids": ["b", "a"],
            "entities": {
                "a": {"id": "a", "title": "A", "dueDay": "2026-02-20"},
                "b": {"id": "b", "title": "B", "timeSpentOnDay": {"2026-02-21": 60000}},
            },
        },
        "archiveYoung": {"task": {"ids": ["c"], "entities": {"c": {"id": "c", "title": "C"}}}},
        "archiveOld": {"task": {"entities": {"a": {"id": "a", "title": "A archived"}}}},
        "project": {"ids": ["p1"], "entities": {"p1": {"id": "p1", "title": "Inbox"}}},
    }
    tasks, projects = parse_snapshot(data)
    assert [t.id for t in tasks] == ["b", "a", "c"]
    assert tasks[1].title == "A archived"
    assert tasks[0].time_spent_on_day == {date(2026, 2, 21): 60000}
    assert projects[0].title == "Inbox"


def test_wrapped_data_shape():
    tasks, _ = parse_snapshot({"data": {"task": {"entities": {"x": {"id": "x", "title": "X"}}}}})
    assert [t.id for t in tasks] == ["x"]


def test_empty_object():
    assert parse_snapshot({}) == ([], [])


def test_non_object_rejected():
    with pytest.raises(SnapshotError):
        parse_snapshot([1, 2, 3])


def test_load_snapshot_from_file(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({"tasks": [{"id": "t1", "title": "One"}]}))
    tasks, projects = load_snapshot(path)
    assert [t.title for t in tasks] == ["One"]
    assert projects == []


def test_load_snapshot_missing(tmp_path):
    with pytest.raises(SnapshotError, match="not found"):
        load_snapshot(tmp_path / "missing.json")


def test_load_snapshot_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{nope")
    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_non_finite_json_literals_are_dropped():
    raw = json.loads(
        '{"tasks": [{"id": "t1", "title": "x", "doneOn": Infinity,'
        ' "timeSpentOnDay": {"2026-02-20": NaN, "2026-02-21": 60000}}]}'
    )
    tasks, _ = parse_snapshot(raw)
    assert tasks[0].done_on is None
    assert tasks[0].time_spent_on_day == {date(2026, 2, 21): 60_000}

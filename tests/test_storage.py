import json
from datetime import datetime, timedelta

import pytest

from tasktrack.mark import ALLOWED_MARKS, Mark
from tasktrack.storage import DataRow, Storage, TaskNotFoundError


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path / "todo-list-test.json")


def _five_rows():
    return [
        DataRow(id=1, description="Test1", status=Mark.TODO),
        DataRow(id=2, description="Test2", status=Mark.TODO),
        DataRow(id=3, description="Test3", status=Mark.CANCELED),
        DataRow(id=4, description="Test4", status=Mark.CANCELED),
        DataRow(id=5, description="Test5", status=Mark.DONE),
    ]


def test_load_restores_saved_rows(storage):
    now = datetime.now().astimezone()
    rows = [
        DataRow(1, "Test1", Mark.TODO, now, now),
        DataRow(2, "Test2", Mark.IN_PROGRESS, now, now),
        DataRow(3, "Test3", Mark.CANCELED, now, now),
        DataRow(4, "Test4", Mark.DONE, now, now),
        DataRow(5, "Test5", Mark.TODO, now, now),
    ]
    for row in rows:
        storage.add(row)
    storage.save()

    fresh = Storage(storage.file_name)
    fresh.load()
    assert len(fresh) == len(rows)
    assert fresh.get_all() == storage.get_all()


def test_load_missing_file_raises(storage):
    with pytest.raises(FileNotFoundError):
        storage.load()


def test_load_merges_into_existing(storage, tmp_path):
    other = Storage(tmp_path / "other.json")
    other.add(DataRow(description="from file"))
    other.save()
    storage.add(DataRow(description="in memory"))
    storage.add(DataRow(description="second"))
    storage.file_name = other.file_name
    storage.load()
    assert [row.description for row in storage.get_all()] == ["from file", "second"]


def test_save_creates_non_empty_file(storage):
    storage.add(DataRow(id=1, description="Test", status=Mark.IN_PROGRESS))
    storage.save()
    assert storage.file_name.exists()
    assert storage.file_name.stat().st_size > 0


def test_save_uses_field_names(storage):
    storage.add(DataRow(description="Test", status=Mark.IN_PROGRESS))
    storage.save()
    data = json.loads(storage.file_name.read_text(encoding="utf-8"))
    assert set(data) == {"1"}
    assert data["1"]["ID"] == 1
    assert data["1"]["Description"] == "Test"
    assert data["1"]["Status"] == 20
    assert set(data["1"]) == {"ID", "Description", "Status", "CreatedAt", "UpdatedAt"}


def test_save_with_no_rows_writes_nothing(storage):
    storage.save()
    assert not storage.file_name.exists()


def test_load_reads_nanosecond_timestamps(storage):
    storage.file_name.write_text(
        json.dumps(
            {
                "3": {
                    "ID": 3,
                    "Description": "x",
                    "Status": 30,
                    "CreatedAt": "2024-05-06T07:08:09.123456789+03:00",
                    "UpdatedAt": "0001-01-01T00:00:00Z",
                }
            }
        ),
        encoding="utf-8",
    )
    storage.load()
    row = storage.get_by_id(3)
    assert row.status == Mark.DONE
    assert row.created_at.microsecond == 123456
    assert row.created_at.utcoffset() == timedelta(hours=3)
    assert row.updated_at is None


@pytest.mark.parametrize(
    "row",
    [
        DataRow(11, "Test1", Mark.TODO),
        DataRow(22, "Test2", Mark.IN_PROGRESS),
        DataRow(33, "Test3"),
        DataRow(44),
        DataRow(),
    ],
)
def test_add_single(storage, row):
    before = datetime.now().astimezone()
    new_id = storage.add(row)
    after = datetime.now().astimezone()
    assert new_id == 1
    stored = storage.get_by_id(new_id)
    assert stored.id == 1
    assert stored.description == row.description
    expected_status = row.status if row.status > 0 else Mark.TODO
    assert stored.status == expected_status
    assert before <= stored.created_at <= after
    assert stored.updated_at == stored.created_at


def test_add_assigns_sequential_ids_without_writing(storage):
    rows = [DataRow(11, "Test1", Mark.TODO), DataRow(22), DataRow(33), DataRow(44), DataRow()]
    assert [storage.add(row) for row in rows] == [1, 2, 3, 4, 5]
    assert not storage.file_name.exists()


def test_add_after_delete_uses_max_plus_one(storage):
    for _ in range(3):
        storage.add(DataRow())
    storage.delete(2)
    assert storage.add(DataRow()) == 4
    storage.delete(4)
    storage.delete(3)
    assert storage.add(DataRow()) == 2


def test_update(storage):
    now = datetime.now().astimezone()
    task_id = storage.add(DataRow(11, "Test1", Mark.TODO, now, now))
    before = storage.get_by_id(task_id)
    later = datetime.now().astimezone()
    storage.update(
        task_id,
        DataRow(2, "Test2", Mark.IN_PROGRESS, later + timedelta(hours=1), later + timedelta(hours=2)),
    )
    after = storage.get_by_id(task_id)
    assert after.id == task_id
    assert after.description == "Test2"
    assert after.status == Mark.IN_PROGRESS
    assert after.created_at == before.created_at
    assert abs(after.updated_at - now) < timedelta(seconds=5)
    assert not storage.file_name.exists()


def test_update_missing_raises(storage):
    with pytest.raises(TaskNotFoundError, match='cannot update command with ID="7"'):
        storage.update(7, DataRow())


def test_delete(storage):
    task_id = storage.add(DataRow(1, "Test1", Mark.TODO))
    storage.delete(task_id)
    with pytest.raises(TaskNotFoundError):
        storage.get_by_id(task_id)
    assert not storage.file_name.exists()


def test_delete_missing_raises(storage):
    with pytest.raises(TaskNotFoundError, match='cannot delete command with ID="3"'):
        storage.delete(3)


def test_get_by_id(storage):
    rows = [
        DataRow(1, "Test1", Mark.TODO),
        DataRow(2, "Test2", Mark.IN_PROGRESS),
        DataRow(3, "Test3", Mark.CANCELED),
        DataRow(4, "Test4", Mark.DONE),
        DataRow(5, "Test5", Mark.TODO),
    ]
    for row in rows:
        storage.add(row)
    with pytest.raises(TaskNotFoundError, match='cannot find command with ID="0"'):
        storage.get_by_id(0)
    for row in rows:
        found = storage.get_by_id(row.id)
        assert (found.description, found.status) == (row.description, row.status)


def test_get_by_status(storage):
    rows = _five_rows()
    for row in rows:
        storage.add(row)
    for mark in ALLOWED_MARKS.values():
        expected = sum(1 for row in rows if row.status == mark)
        result = storage.get_by_status(mark)
        assert len(result) == expected
        assert all(row.status == mark for row in result)


def test_get_all(storage):
    rows = _five_rows()
    for row in rows:
        storage.add(row)
    result = storage.get_all()
    assert len(result) == len(rows)
    assert [row.id for row in result] == [1, 2, 3, 4, 5]
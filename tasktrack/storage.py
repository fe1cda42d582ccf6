"""Task rows kept in memory and persisted to a JSON file."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .mark import Mark


class TaskNotFoundError(LookupError):
    """Raised when no task has the requested ID."""


@dataclass(frozen=True)
class DataRow:
    """Stored data about one task."""

    id: int = 0
    description: str = ""
    status: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


_ZERO_TIME = "0001-01-01T00:00:00Z"
_ZERO_DATETIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_TIME_RE = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|[+-]\d{2}:\d{2})"
)


def _now() -> datetime:
    return datetime.now().astimezone()


def _format_time(value: datetime | None) -> str:
    if value is None:
        return _ZERO_TIME
    return value.isoformat()


def _parse_time(text: str) -> datetime | None:
    match = _TIME_RE.fullmatch(text)
    if not match:
        raise ValueError(f"invalid timestamp {text!r}")
    frac = ((match["frac"] or "") + "000000")[:6]
    tz = "+00:00" if match["tz"] == "Z" else match["tz"]
    value = datetime.fromisoformat(f"{match['base']}.{frac}{tz}")
    return None if value == _ZERO_DATETIME else value


def _encode(row: DataRow) -> dict[str, Any]:
    return {
        "ID": row.id,
        "Description": row.description,
        "Status": int(row.status),
        "CreatedAt": _format_time(row.created_at),
        "UpdatedAt": _format_time(row.updated_at),
    }


def _decode(data: Any) -> DataRow:
    if not isinstance(data, dict):
        raise ValueError("task entry must be an object")
    status = data.get("Status", 0)
    return DataRow(
        id=int(data.get("ID", 0)),
        description=str(data.get("Description", "")),
        status=Mark(status) if status else 0,
        created_at=_parse_time(data.get("CreatedAt", _ZERO_TIME)),
        updated_at=_parse_time(data.get("UpdatedAt", _ZERO_TIME)),
    )


class Storage:
    """Tasks keyed by ID, backed by a JSON file."""

    def __init__(self, file_name: str | os.PathLike[str]) -> None:
        self.file_name = Path(file_name)
        self._rows: dict[int, DataRow] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._rows

    def add(self, row: DataRow) -> int:
        """Store a new task under the next free ID and return that ID."""
        new_id = max(self._rows, default=0) + 1
        now = _now()
        self._rows[new_id] = replace(
            row,
            id=new_id,
            created_at=now,
            updated_at=now,
            status=row.status if row.status > 0 else Mark.TODO,
        )
        return new_id

    def delete(self, task_id: int) -> None:
        """Remove the task with the given ID."""
        if task_id not in self._rows:
            raise TaskNotFoundError(f'cannot delete command with ID="{task_id}"')
        del self._rows[task_id]

    def update(self, task_id: int, row: DataRow) -> None:
        """Replace a task's data, keeping its ID and creation time."""
        current = self._rows.get(task_id)
        if current is None:
            raise TaskNotFoundError(f'cannot update command with ID="{task_id}"')
        self._rows[task_id] = replace(
            row, id=task_id, updated_at=_now(), created_at=current.created_at
        )

    def get_by_id(self, task_id: int) -> DataRow:
        """Return the task with the given ID."""
        try:
            return self._rows[task_id]
        except KeyError:
            raise TaskNotFoundError(f'cannot find command with ID="{task_id}"') from None

    def get_by_status(self, status: int) -> list[DataRow]:
        """Return the tasks that have the given status, ordered by ID."""
        return [row for row in self.get_all() if row.status == status]

    def get_all(self) -> list[DataRow]:
        """Return every task, ordered by ID."""
        return [self._rows[key] for key in sorted(self._rows)]

    def load(self) -> None:
        """Read tasks from the file, merging them into those held."""
        data = json.loads(self.file_name.read_text(encoding="utf-8"))
        if data is None:
            self._rows = {}
            return
        if not isinstance(data, dict):
            raise ValueError("task file must hold an object")
        self._rows.update({int(key): _decode(value) for key, value in data.items()})

    def save(self) -> None:
        """Write all tasks to the file; nothing is written when there are none."""
        if not self._rows:
            return
        payload = {str(key): _encode(self._rows[key]) for key in sorted(self._rows)}
        self.file_name.write_text(
            json.dumps(payload, ensure_ascii=False, separators=(",", ":")),
            encoding="utf-8",
        )
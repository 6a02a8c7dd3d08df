"""JSON persistence for the task collection: one file, rewritten whole."""

from __future__ import annotations

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from tasktracker import log
from tasktracker.errors import CorruptDataError, WriteFailureError
from tasktracker.io_utils import read_text, write_text_atomic
from tasktracker.tasks.model import Task, TaskCollection, TaskStatus

META_KEY = "_meta"
RECORD_FIELDS = ("description", "status", "created_at", "updated_at")

# Fractional seconds beyond microseconds, as written by nanosecond clocks.
_LONG_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Accepts a trailing ``Z`` and truncates sub-microsecond digits. Naive
    values are rejected with ``ValueError``.
    """
    normalized = text.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    normalized = _LONG_FRACTION_RE.sub(r"\1", normalized)
    value = datetime.fromisoformat(normalized)
    if value.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {text!r}")
    return value


def task_to_record(task: Task) -> dict[str, Any]:
    """Serialize *task*; the id lives only in the mapping key."""
    return {
        "description": task.description,
        "status": task.status.value,
        "created_at": format_timestamp(task.created_at),
        "updated_at": format_timestamp(task.updated_at),
    }


def task_from_record(task_id: int, record: Any) -> Task:
    """Build a Task from a stored record. Raises ``ValueError`` on bad shape."""
    if not isinstance(record, dict):
        raise ValueError(f"task {task_id}: record is not an object")
    for name in RECORD_FIELDS:
        if name not in record:
            raise ValueError(f"task {task_id}: missing field '{name}'")
        if not isinstance(record[name], str):
            raise ValueError(f"task {task_id}: field '{name}' is not a string")
    try:
        status = TaskStatus.parse(record["status"])
        created_at = parse_timestamp(record["created_at"])
        updated_at = parse_timestamp(record["updated_at"])
    except ValueError as exc:
        raise ValueError(f"task {task_id}: {exc}") from exc
    if updated_at < created_at:
        raise ValueError(f"task {task_id}: updated_at is earlier than created_at")
    return Task(
        id=task_id,
        description=record["description"],
        status=status,
        created_at=created_at,
        updated_at=updated_at,
    )


def _parse_task_id(key: str) -> int:
    if not key.isdecimal():
        raise ValueError(f"invalid task id key: {key!r}")
    task_id = int(key)
    if task_id < 1:
        raise ValueError(f"task id must be positive: {key!r}")
    return task_id


def _parse_last_id(meta: Any) -> int:
    if not isinstance(meta, dict):
        raise ValueError(f"'{META_KEY}' is not an object")
    last_id = meta.get("last_id", 0)
    # bool is an int subclass
    if isinstance(last_id, bool) or not isinstance(last_id, int) or last_id < 0:
        raise ValueError(f"'{META_KEY}.last_id' must be a non-negative integer")
    return last_id


def collection_from_json(data: Any) -> TaskCollection:
    """Build a TaskCollection from decoded JSON. Raises ``ValueError`` on bad shape."""
    if not isinstance(data, dict):
        raise ValueError("top-level value is not an object")
    tasks: dict[int, Task] = {}
    last_id = 0
    for key, value in data.items():
        if key == META_KEY:
            last_id = _parse_last_id(value)
            continue
        task_id = _parse_task_id(key)
        if task_id in tasks:
            raise ValueError(f"duplicate task id: {task_id}")
        tasks[task_id] = task_from_record(task_id, value)
    return TaskCollection(tasks=tasks, last_id=last_id)


def collection_to_json(collection: TaskCollection) -> dict[str, Any]:
    data: dict[str, Any] = {
        str(task.id): task_to_record(task) for task in collection.sorted()
    }
    data[META_KEY] = {"last_id": collection.last_id}
    return data


class TaskStore:
    """Reads and rewrites the storage file holding the whole task collection.

    Usage::

        store = TaskStore(resolve_storage_path())
        if store.exists():
            tasks = store.load()    # TaskCollection
        store.save(tasks)           # full rewrite via temp file + rename
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> TaskCollection:
        """Return the stored collection, or an empty one if there is no file."""
        if not self.exists():
            log.debug(f"No storage file at {self.path}; starting empty")
            return TaskCollection()
        try:
            raw = read_text(self.path)
        except (OSError, UnicodeDecodeError) as exc:
            raise CorruptDataError(self.path, str(exc)) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptDataError(self.path, f"invalid JSON: {exc}") from exc
        try:
            collection = collection_from_json(data)
        except ValueError as exc:
            raise CorruptDataError(self.path, str(exc)) from exc
        log.debug(f"Loaded {len(collection)} task(s) from {self.path}")
        return collection

    def save(self, collection: TaskCollection) -> None:
        """Replace the storage file with *collection* in full."""
        text = json.dumps(collection_to_json(collection), ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            write_text_atomic(self.path, text + "\n")
        except OSError as exc:
            raise WriteFailureError(self.path, str(exc)) from exc
        log.debug(f"Saved {len(collection)} task(s) to {self.path}")

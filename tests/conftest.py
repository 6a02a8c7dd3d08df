"""Shared fixtures for task-tracker tests.

File handling in tests:
- Use tmp_path for the storage file so tests are isolated and cleaned up.
- Use tasktracker.io_utils read_text/write_text for consistent UTF-8 I/O.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tasktracker import log
from tasktracker.tasks.ids import next_id_by_sequence
from tasktracker.tasks.model import Task, TaskStatus
from tasktracker.tasks.service import TaskService
from tasktracker.tasks.store import TaskStore

T0 = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that advances by *step* on every read."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch):
    """Keep user env vars and verbose state out of every test."""
    monkeypatch.delenv("TASK_TRACKER_FILE", raising=False)
    monkeypatch.delenv("TASK_TRACKER_ID_STRATEGY", raising=False)
    yield
    log.set_verbose(False)


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


@pytest.fixture
def store(data_path: Path) -> TaskStore:
    return TaskStore(data_path)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(store: TaskStore, clock: FakeClock) -> TaskService:
    return TaskService(store, allocator=next_id_by_sequence, clock=clock)


def _make_task(
    id: int,
    description: str = "",
    status: TaskStatus = TaskStatus.TODO,
    created_at: datetime = T0,
    updated_at: datetime | None = None,
) -> Task:
    return Task(
        id=id,
        description=description or f"Task {id}",
        status=status,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task

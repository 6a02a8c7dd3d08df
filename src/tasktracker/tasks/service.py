"""Mutation operations over the stored task collection.

Every operation re-reads the storage file, applies one change and writes the
whole collection back. Nothing is cached between calls.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from tasktracker import log
from tasktracker.errors import NoTasksExistError, TaskNotFoundError
from tasktracker.tasks.ids import Allocator, next_id_by_sequence
from tasktracker.tasks.model import Task, TaskCollection, TaskStatus, utc_now
from tasktracker.tasks.store import TaskStore

Clock = Callable[[], datetime]


class TaskService:
    """Add, update, delete, status changes and listing against a TaskStore."""

    def __init__(
        self,
        store: TaskStore,
        *,
        allocator: Allocator = next_id_by_sequence,
        clock: Clock = utc_now,
    ) -> None:
        self.store = store
        self.allocator = allocator
        self.clock = clock

    # ── helpers ──────────────────────────────────────────────────

    def _load_existing(self) -> TaskCollection:
        if not self.store.exists():
            raise NoTasksExistError()
        return self.store.load()

    @staticmethod
    def _lookup(collection: TaskCollection, task_id: int) -> Task:
        task = collection.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    # ── operations ───────────────────────────────────────────────

    def add(self, description: str) -> int:
        """Create a todo task and return its id. Creates the file if needed."""
        collection = self.store.load()
        task_id = self.allocator(collection)
        if task_id in collection:
            log.warn(f"Task {task_id} already exists and will be replaced")
        now = self.clock()
        collection.put(Task.create(task_id, description, now))
        self.store.save(collection)
        log.debug(f"Added task {task_id}")
        return task_id

    def update(self, task_id: int, description: str) -> Task:
        collection = self._load_existing()
        task = self._lookup(collection, task_id)
        task.description = description
        task.touch(self.clock())
        self.store.save(collection)
        log.debug(f"Updated description of task {task_id}")
        return task

    def delete(self, task_id: int) -> Task:
        collection = self._load_existing()
        self._lookup(collection, task_id)
        task = collection.remove(task_id)
        self.store.save(collection)
        log.debug(f"Deleted task {task_id}")
        return task

    def set_status(self, task_id: int, status: TaskStatus) -> Task:
        """Set *status* unconditionally; any state may follow any other."""
        collection = self._load_existing()
        task = self._lookup(collection, task_id)
        task.status = status
        task.touch(self.clock())
        self.store.save(collection)
        log.debug(f"Task {task_id} is now {status.value}")
        return task

    def mark_in_progress(self, task_id: int) -> Task:
        return self.set_status(task_id, TaskStatus.IN_PROGRESS)

    def mark_done(self, task_id: int) -> Task:
        return self.set_status(task_id, TaskStatus.DONE)

    def get(self, task_id: int) -> Task:
        """Return one task without modifying storage."""
        return self._lookup(self._load_existing(), task_id)

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        """Return tasks in id order; empty when there is no storage file."""
        return self.store.load().sorted(status)

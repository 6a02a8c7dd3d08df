"""Task and TaskCollection data models shared by the store and the service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, text: str) -> TaskStatus:
        """Return the member whose stored value is *text*.

        Raises ``ValueError`` for anything outside the three known states.
        """
        for member in cls:
            if member.value == text:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown status: {text!r}. Valid statuses: {allowed}.")


STATUS_VALUES: tuple[str, ...] = tuple(s.value for s in TaskStatus)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    id: int
    description: str
    created_at: datetime
    updated_at: datetime
    status: TaskStatus = TaskStatus.TODO

    @classmethod
    def create(cls, task_id: int, description: str, now: datetime) -> Task:
        """Return a new todo task stamped with *now* on both timestamps."""
        return cls(id=task_id, description=description, created_at=now, updated_at=now)

    def touch(self, now: datetime) -> None:
        """Refresh ``updated_at``; it never moves backwards."""
        self.updated_at = max(now, self.updated_at)


@dataclass
class TaskCollection:
    """All known tasks keyed by id, plus the highest id ever handed out."""

    tasks: dict[int, Task] = field(default_factory=dict)
    last_id: int = 0

    def __post_init__(self) -> None:
        self.last_id = max(self.last_id, max(self.tasks, default=0))

    def __len__(self) -> int:
        return len(self.tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.tasks

    def get(self, task_id: int) -> Task | None:
        return self.tasks.get(task_id)

    def put(self, task: Task) -> None:
        """Store *task* under its id, replacing any record with the same key."""
        self.tasks[task.id] = task
        self.last_id = max(self.last_id, task.id)

    def remove(self, task_id: int) -> Task:
        return self.tasks.pop(task_id)

    def sorted(self, status: TaskStatus | None = None) -> list[Task]:
        """Return tasks in ascending id order, optionally only one status."""
        ordered = [self.tasks[tid] for tid in sorted(self.tasks)]
        if status is None:
            return ordered
        return [t for t in ordered if t.status == status]

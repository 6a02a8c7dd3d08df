"""Error kinds raised by the task store and mutation operations."""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(RuntimeError):
    """Base class for every error the tracker raises on purpose."""


class NoTasksExistError(TaskTrackerError):
    """Raised when an operation needs existing tasks but no storage file exists."""

    def __init__(self) -> None:
        super().__init__("no tasks created yet")


class TaskNotFoundError(TaskTrackerError):
    """Raised when a task id is not present in the collection."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"task {task_id} not found")


class CorruptDataError(TaskTrackerError):
    """Raised when the storage file exists but cannot be read as a task collection."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read tasks from {path}: {reason}")


class WriteFailureError(TaskTrackerError):
    """Raised when the storage file cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"saving tasks to {path} failed: {reason}")


class ConfigurationError(TaskTrackerError):
    """Raised when the storage location cannot be determined."""


# Expected outcomes the caller reports to the user without failing the process.
RECOVERABLE_ERRORS: tuple[type[TaskTrackerError], ...] = (
    NoTasksExistError,
    TaskNotFoundError,
)

"""Identifier allocators — derive the id of the next new task."""

from __future__ import annotations

from typing import Callable

from tasktracker.tasks.model import TaskCollection

Allocator = Callable[[TaskCollection], int]


def next_id_by_size(collection: TaskCollection) -> int:
    """Return ``len(collection) + 1``.

    After a deletion this can equal a live id; adding then replaces that
    task's record.
    """
    return len(collection) + 1


def next_id_by_sequence(collection: TaskCollection) -> int:
    """Return one past the highest id ever assigned, so ids are never reused."""
    return max(collection.last_id, max(collection.tasks, default=0)) + 1


def get_allocator(name: str) -> Allocator:
    """Return the allocator registered under *name*."""
    match name:
        case "sequence":
            return next_id_by_sequence
        case "size":
            return next_id_by_size
        case _:
            raise ValueError(f"Unknown id strategy: {name}")


ALLOCATOR_NAMES = ("sequence", "size")

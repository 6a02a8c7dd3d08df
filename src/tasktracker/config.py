"""Configuration defaults, env vars, and storage location for the tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from tasktracker.errors import ConfigurationError
from tasktracker.tasks.ids import ALLOCATOR_NAMES


VERSION = "1.0.0"

DATA_FILE_NAME = "data.json"
DEFAULT_ID_STRATEGY = "sequence"


@dataclass
class Config:
    """Runtime configuration — CLI flags win over environment variables."""

    # Storage
    data_file: str = ""

    # Identifier allocation: "sequence" never reuses ids, "size" is count + 1
    id_strategy: str = ""

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.data_file:
            self.data_file = os.environ.get("TASK_TRACKER_FILE") or DATA_FILE_NAME
        if not self.id_strategy:
            self.id_strategy = (
                os.environ.get("TASK_TRACKER_ID_STRATEGY") or DEFAULT_ID_STRATEGY
            )
        self.id_strategy = self.id_strategy.strip().lower()
        if self.id_strategy not in ALLOCATOR_NAMES:
            allowed = ", ".join(ALLOCATOR_NAMES)
            raise ConfigurationError(
                f"Unknown id strategy: {self.id_strategy}. Valid strategies: {allowed}."
            )


def resolve_storage_path(filename: str = DATA_FILE_NAME, cwd: Path | None = None) -> Path:
    """Return the storage file path for the current working directory.

    Absolute *filename* values are returned unchanged.
    """
    target = Path(filename)
    if target.is_absolute():
        return target
    if cwd is None:
        try:
            cwd = Path.cwd()
        except OSError as exc:
            raise ConfigurationError(f"cannot resolve working directory: {exc}") from exc
    return cwd / target

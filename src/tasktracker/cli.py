"""task-tracker CLI — thin click layer over :class:`TaskService`.

Installed as ``task-tracker`` console_script via pipx / pip.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Callable, TypeVar

import click
from rich.markup import escape
from rich.table import Table

from tasktracker import __version__
from tasktracker import log
from tasktracker.config import Config, resolve_storage_path
from tasktracker.errors import RECOVERABLE_ERRORS, TaskTrackerError
from tasktracker.tasks.ids import ALLOCATOR_NAMES, get_allocator
from tasktracker.tasks.model import STATUS_VALUES, Task, TaskStatus
from tasktracker.tasks.service import TaskService
from tasktracker.tasks.store import TaskStore

T = TypeVar("T")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

STATUS_STYLES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "cyan",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.DONE: "green",
}


def _fail(msg: str) -> None:
    log.error(msg)
    sys.exit(1)


def _build_service(cfg: Config) -> TaskService:
    path = resolve_storage_path(cfg.data_file)
    log.debug(f"Storage file: {path}")
    return TaskService(TaskStore(path), allocator=get_allocator(cfg.id_strategy))


def _run(ctx: click.Context, action: Callable[[TaskService], T]) -> T | None:
    """Run *action*, reporting expected errors and exiting 1 on fatal ones."""
    service: TaskService = ctx.obj
    try:
        return action(service)
    except RECOVERABLE_ERRORS as exc:
        log.error(str(exc))
        return None
    except TaskTrackerError as exc:
        _fail(str(exc))
    return None


def _format_time(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def _status_cell(status: TaskStatus) -> str:
    return f"[{STATUS_STYLES[status]}]{status.value}[/{STATUS_STYLES[status]}]"


def _render_tasks(tasks: list[Task], title: str = "Tasks") -> None:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Description")
    table.add_column("Status")
    table.add_column("Created")
    table.add_column("Updated")
    for task in tasks:
        table.add_row(
            str(task.id),
            escape(task.description),
            _status_cell(task.status),
            _format_time(task.created_at),
            _format_time(task.updated_at),
        )
    log.console.print(table)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--file",
    "data_file",
    default="",
    help="Storage file (default: data.json in the working directory, or $TASK_TRACKER_FILE)",
)
@click.option(
    "--id-strategy",
    type=click.Choice(ALLOCATOR_NAMES),
    default=None,
    help="How new ids are picked: 'sequence' never reuses ids, 'size' uses task count + 1",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="task-tracker")
@click.pass_context
def main(ctx: click.Context, data_file: str, id_strategy: str | None, verbose: bool) -> None:
    """Track tasks in a local JSON file.

    \b
    EXAMPLES:
      task-tracker add "Buy milk"
      task-tracker update 1 "Buy oat milk"
      task-tracker mark-in-progress 1
      task-tracker mark-done 1
      task-tracker list done
      task-tracker delete 1
    """
    log.set_verbose(verbose)
    try:
        cfg = Config(data_file=data_file, id_strategy=id_strategy or "", verbose=verbose)
        ctx.obj = _build_service(cfg)
    except TaskTrackerError as exc:
        _fail(str(exc))


@main.command()
@click.argument("description")
@click.pass_context
def add(ctx: click.Context, description: str) -> None:
    """Add a new task."""
    task_id = _run(ctx, lambda s: s.add(description))
    if task_id is not None:
        log.success(f"Task added successfully (ID: {task_id})")


@main.command()
@click.argument("task_id", type=int)
@click.argument("description")
@click.pass_context
def update(ctx: click.Context, task_id: int, description: str) -> None:
    """Change the description of a task."""
    if _run(ctx, lambda s: s.update(task_id, description)) is not None:
        log.success(f"Task {task_id} updated")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete a task permanently."""
    if _run(ctx, lambda s: s.delete(task_id)) is not None:
        log.success(f"Task {task_id} deleted")


@main.command("mark-in-progress")
@click.argument("task_id", type=int)
@click.pass_context
def mark_in_progress(ctx: click.Context, task_id: int) -> None:
    """Mark a task as in progress."""
    if _run(ctx, lambda s: s.mark_in_progress(task_id)) is not None:
        log.success(f"Task {task_id} marked as in-progress")


@main.command("mark-done")
@click.argument("task_id", type=int)
@click.pass_context
def mark_done(ctx: click.Context, task_id: int) -> None:
    """Mark a task as done."""
    if _run(ctx, lambda s: s.mark_done(task_id)) is not None:
        log.success(f"Task {task_id} marked as done")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def show(ctx: click.Context, task_id: int) -> None:
    """Show a single task."""
    task = _run(ctx, lambda s: s.get(task_id))
    if task is not None:
        _render_tasks([task], title=f"Task {task_id}")


@main.command("list")
@click.argument("status", type=click.Choice(STATUS_VALUES), required=False)
@click.pass_context
def list_cmd(ctx: click.Context, status: str | None) -> None:
    """List tasks, optionally only those with STATUS."""
    wanted = TaskStatus.parse(status) if status else None
    tasks = _run(ctx, lambda s: s.list_tasks(wanted))
    if tasks is None:
        return
    if not tasks:
        log.info("No tasks found.")
        return
    title = f"Tasks ({wanted.value})" if wanted else "Tasks"
    _render_tasks(tasks, title=title)

"""Small console logging helpers for batch metrics builds."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
import typer


@dataclass(slots=True)
class MetricsPipelineLogger:
    """Console reporter used while building many font configurations."""

    verbose: bool = False
    console: Console | None = None
    show_progress: bool = True

    def _render_message(self, message: str, args: tuple[Any, ...]) -> str:
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = " ".join([message, *(str(arg) for arg in args)])
        return message

    def info(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self.console is not None:
            self.console.log(message, markup=False)
            return
        typer.echo(message)

    def warning(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self.console is not None:
            self.console.log(message, style="yellow", markup=False)
            return
        typer.secho(message, fg="yellow", err=True)

    def debug(self, message: str, *args: Any) -> None:
        """Emit a verbose message when verbose mode is enabled."""
        if not self.verbose:
            return
        self.info(message, *args)

    @contextmanager
    def progress(self, task: str, total: int | None = None) -> Iterator[Callable[..., None]]:
        """Yield a progress updater backed by a Rich progress bar."""
        if not self.show_progress:

            def _noop(step: int = 1) -> None:
                return

            yield _noop
            return

        console = self.console or Console(stderr=True)
        with Progress(
            SpinnerColumn(),
            TextColumn(f"[bold cyan]{task}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}" if total else "{task.completed}"),
            TimeElapsedColumn(),
            console=console,
            transient=not self.verbose,
        ) as progress:
            task_id: TaskID = progress.add_task(task, total=total)

            def _advance(step: int = 1) -> None:
                progress.update(task_id, advance=step)

            yield _advance


__all__ = ["MetricsPipelineLogger"]

"""progress display for catalog fetches and artifact downloads."""

import sys
from contextlib import contextmanager
from typing import Optional
from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    DownloadColumn,
    TransferSpeedColumn,
    TimeRemainingColumn,
    TaskID,
)


class ProgressManager:
    """shows spinners and download bars when attached to a terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self._enabled = self._should_show_progress()

    def _should_show_progress(self) -> bool:
        # no progress bars when piped or in ci
        return sys.stdout.isatty() and not sys.stdout.closed

    def print(self, *args, **kwargs):
        self.console.print(*args, **kwargs)

    @contextmanager
    def spinner(self, description: str, transient: bool = True):
        """
        show a spinner while fetching something of unknown duration.

        yields:
            task id of the spinner, or None when progress is disabled
        """
        if not self._enabled:
            self.console.print(f"{description}...")
            yield None
            return

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=transient,
        ) as progress:
            yield progress.add_task(description, total=None)

    @contextmanager
    def download_progress(self):
        """
        create a download progress context with transfer speed tracking.

        yields:
            Progress instance, or a no-op stand-in when progress is disabled
        """
        if not self._enabled:
            yield _DummyProgress()
            return

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=self.console,
        ) as progress:
            yield progress


class _DummyProgress:
    """progress stand-in for non-interactive mode."""

    def add_task(self, description: str, total: Optional[int] = None, **kwargs) -> TaskID:
        return TaskID(0)

    def update(self, task_id: TaskID, **kwargs):
        pass

"""test suite for progress manager."""
from unittest.mock import Mock, patch

from rich.console import Console
from rich.progress import Progress

from plugin_update.ui.progress import ProgressManager, _DummyProgress


class TestProgressManager:
    def test_initialization_custom_console(self):
        custom_console = Console()
        pm = ProgressManager(console=custom_console)
        assert pm.console is custom_console

    def test_tty_detection_interactive(self):
        with patch('sys.stdout.isatty', return_value=True):
            pm = ProgressManager()
            assert pm._enabled is True

    def test_tty_detection_non_interactive(self):
        with patch('sys.stdout.isatty', return_value=False):
            pm = ProgressManager()
            assert pm._enabled is False

    def test_print_method(self):
        mock_console = Mock(spec=Console)
        pm = ProgressManager(console=mock_console)

        pm.print("downloaded", style="bold")
        mock_console.print.assert_called_once_with("downloaded", style="bold")

    def test_spinner_non_interactive(self):
        with patch('sys.stdout.isatty', return_value=False):
            mock_console = Mock(spec=Console)
            pm = ProgressManager(console=mock_console)

            with pm.spinner("reading plugin repositories") as task_id:
                assert task_id is None

            mock_console.print.assert_called_once_with("reading plugin repositories...")

    def test_spinner_interactive(self):
        with patch('sys.stdout.isatty', return_value=True):
            pm = ProgressManager(console=Console(force_terminal=True))
            with pm.spinner("reading plugin repositories") as task_id:
                assert task_id is not None

    def test_download_progress_interactive(self):
        with patch('sys.stdout.isatty', return_value=True):
            pm = ProgressManager(console=Console(force_terminal=True))
            with pm.download_progress() as progress:
                assert isinstance(progress, Progress)
                task_id = progress.add_task("downloading foo@1.0.0", total=100)
                progress.update(task_id, completed=50)

    def test_download_progress_non_interactive(self):
        with patch('sys.stdout.isatty', return_value=False):
            pm = ProgressManager()
            with pm.download_progress() as progress:
                assert isinstance(progress, _DummyProgress)


class TestDummyProgress:
    def test_operations_are_noops(self):
        dummy = _DummyProgress()
        task_id = dummy.add_task("downloading", total=None)
        assert task_id == 0
        dummy.update(task_id, total=10)
        dummy.update(task_id, completed=10)

import logging
import shutil
from pathlib import Path
from typing import List, Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from ..config import load_repositories, create_repositories
from ..domain.errors import AuthRequiredError, ConnectError, DownloadError, RepositoryConfigError
from ..registry.repository import DefaultUpdateRepository
from ..services.info import InfoService
from ..ui.progress import ProgressManager
from .repo_commands import app as repo_app

app = typer.Typer()
console = Console()

app.add_typer(repo_app, name="repo", help="Manage plugin repositories")


@app.callback()
def main_callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    """discover and download plugins from plugin repositories."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def get_repositories(repo: Optional[str] = None) -> List[DefaultUpdateRepository]:
    try:
        specs = load_repositories()
    except RepositoryConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if repo:
        specs = [s for s in specs if s.id == repo]
        if not specs:
            console.print(f"[red]Repository '{repo}' is not configured.[/red]")
            raise typer.Exit(1)

    if not specs:
        console.print("[red]No repositories configured. Run 'repo add' first.[/red]")
        raise typer.Exit(1)

    return create_repositories(specs)


@app.command("list")
def list_plugins(repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Only this repository")):
    """list available plugins."""
    InfoService(get_repositories(repo), console).list_plugins()


@app.command()
def info(
    plugin_id: str,
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Only this repository")
):
    """show information about a plugin."""
    if not InfoService(get_repositories(repo), console).show_info(plugin_id):
        raise typer.Exit(1)


@app.command()
def download(
    plugin_id: str,
    version: Optional[str] = typer.Option(None, "--version", help="Release to download (default: latest)"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Only this repository"),
    dest: Optional[Path] = typer.Option(None, "--dest", "-d", help="Directory to move the file into"),
):
    """download a plugin release and print its local path."""
    progress_manager = ProgressManager(console)

    repository, plugin = None, None
    with progress_manager.spinner("reading plugin repositories"):
        for candidate in get_repositories(repo):
            plugin = candidate.get_plugin(plugin_id)
            if plugin is not None:
                repository = candidate
                break

    if plugin is None:
        console.print(f"[red]Plugin '{plugin_id}' not found in any repository.[/red]")
        raise typer.Exit(1)

    release = plugin.get_release(version) if version else plugin.latest_release()
    if release is None:
        wanted = f"version {version}" if version else "any release"
        console.print(f"[red]Plugin '{plugin_id}' has no {wanted}.[/red]")
        raise typer.Exit(1)

    downloader = repository.get_file_downloader()
    try:
        with progress_manager.download_progress() as progress:
            task_id = progress.add_task(f"downloading {plugin_id}@{release.version}", total=None)
            path = downloader.download_file(release.url, progress, task_id)
    except AuthRequiredError as e:
        console.print(f"[red]Authorization required:[/red] {e.url}")
        raise typer.Exit(1)
    except ConnectError as e:
        console.print(f"[red]Could not connect:[/red] {e}")
        raise typer.Exit(1)
    except DownloadError as e:
        console.print(f"[red]Download failed:[/red] {e}")
        raise typer.Exit(1)
    except (httpx.HTTPError, OSError) as e:
        console.print(f"[red]Download failed:[/red] {e}")
        raise typer.Exit(1)

    if dest:
        dest.mkdir(parents=True, exist_ok=True)
        path = Path(shutil.move(str(path), str(dest / path.name)))

    console.print(str(path), soft_wrap=True, highlight=False)


def main():
    app()


if __name__ == "__main__":
    main()

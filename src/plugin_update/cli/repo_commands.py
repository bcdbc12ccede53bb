import typer
from rich.console import Console
from rich.table import Table

from ..config import load_repositories, add_repository, remove_repository
from ..domain.errors import RepositoryConfigError

app = typer.Typer()
console = Console()


@app.command("add")
def add_repo(id: str, url: str):
    """add a repository, or change the url of an existing one."""
    try:
        spec = add_repository(id, url)
    except RepositoryConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]✓ Repository '{spec.id}' -> {spec.url}[/green]")


@app.command("remove")
def remove_repo(id: str):
    """remove a repository."""
    try:
        removed = remove_repository(id)
    except RepositoryConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not removed:
        console.print(f"[yellow]Repository '{id}' is not configured.[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]✓ Repository '{id}' removed[/green]")


@app.command("list")
def list_repos():
    """list configured repositories."""
    try:
        specs = load_repositories()
    except RepositoryConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not specs:
        console.print("[yellow]No repositories configured.[/yellow]")
        console.print("\nAdd one with: [cyan]plugin-update repo add <id> <url>[/cyan]")
        return

    table = Table(title="Repositories")
    table.add_column("Id", style="cyan")
    table.add_column("Url")
    for spec in specs:
        table.add_row(spec.id, spec.url)
    console.print(table)

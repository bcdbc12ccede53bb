from typing import List, Optional
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..registry.client import UpdateRepository


class InfoService:
    """displays plugin metadata from one or more repositories."""

    def __init__(self, repositories: List[UpdateRepository], console: Optional[Console] = None):
        self.repositories = repositories
        self.console = console or Console()

    def list_plugins(self):
        """print a table of every plugin in every repository."""
        table = Table(title="Plugins")
        table.add_column("Repository", style="cyan")
        table.add_column("Plugin", style="bold")
        table.add_column("Latest")
        table.add_column("Description")

        rows = 0
        for repository in self.repositories:
            for plugin_id, plugin in sorted(repository.get_plugins().items()):
                latest = plugin.latest_release()
                table.add_row(
                    repository.id,
                    plugin_id,
                    latest.version if latest else "-",
                    plugin.description or "",
                )
                rows += 1

        if not rows:
            # an empty catalog is also what an unreachable repository looks like
            self.console.print("[yellow]No plugins found.[/yellow] Check that the repositories are reachable.")
            return

        self.console.print(table)

    def show_info(self, plugin_id: str) -> bool:
        """
        print information about a plugin.

        returns false if no repository lists the plugin.
        """
        for repository in self.repositories:
            plugin = repository.get_plugin(plugin_id)
            if plugin is None:
                continue

            grid = Table.grid(expand=True)
            grid.add_column(style="bold cyan", justify="right")
            grid.add_column(style="white")

            grid.add_row("Id:", plugin.id)
            grid.add_row("Repository:", f"{repository.id} ({repository.url})")
            if plugin.name:
                grid.add_row("Name:", plugin.name)
            grid.add_row("Description:", plugin.description or "No description provided.")
            if plugin.provider:
                grid.add_row("Provider:", plugin.provider)
            if plugin.project_url:
                grid.add_row("Homepage:", plugin.project_url)

            latest = plugin.latest_release()
            grid.add_row("Latest:", latest.version if latest else "None")

            releases = Table("Version", "Date", "Requires", "Url", box=None)
            for release in plugin.releases:
                releases.add_row(release.version, release.date or "", release.requires or "", release.url)

            self.console.print(Panel(grid, title=f"Plugin Info: {plugin.id}", border_style="cyan"))
            if plugin.releases:
                self.console.print(releases)
            return True

        self.console.print(f"[red]Plugin '{plugin_id}' not found in any repository.[/red]")
        return False

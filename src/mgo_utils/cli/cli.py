"""
Rich front end for the mgo utilities.
"""

from typing import Optional
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich import box
from mgo_utils.core import config
from mgo_utils.fsutils import read_line


class UtilsCLI:
    def __init__(self, command_handler, console: Optional[Console] = None):
        self.console = console or Console()
        self.command_handler = command_handler

    def display_menu(self):
        """Display the main menu."""
        menu_table = Table(
            box=box.ROUNDED,
            show_lines=True,
            style="bold white",
            border_style="dim white",
        )
        menu_table.add_column("[bold grey42]Option[/bold grey42]", justify="center", style="wheat1", width=10)
        menu_table.add_column("[bold grey42]Description[/bold grey42]", justify="left", style="white")
        menu_table.add_row("[1]", "[bold green]Run[/bold green] a system command")
        menu_table.add_row("[2]", "[bold bright_blue]Copy[/bold bright_blue] a directory tree")
        menu_table.add_row("[3]", "[bold cyan]MD5[/bold cyan] digest of a text")
        menu_table.add_row("[4]", "[bold red]Exit[/bold red]")

        subtitle = Text.assemble(("mgo utilities | ", "dim"), (f"v{config.VERSION}", "dim"))
        self.console.print(subtitle, justify="center")
        self.console.print(menu_table)

    def prompt(self, label: str) -> str:
        return read_line(f"[bold wheat1]{label}: [/bold wheat1]", console=self.console).strip()

    def prompt_yes_no(self, label: str) -> bool:
        return self.prompt(f"{label} (y/N)").lower() in ("y", "yes")

    def display_results(self, results: list):
        """Display task results as a table with a one-line summary."""
        if not results:
            self.console.print("[bold yellow]No results to display[/bold yellow]")
            return
        succeeded = sum(1 for r in results if r.get("status") == "Success")
        failed = len(results) - succeeded

        table = Table(box=box.SIMPLE_HEAVY, expand=True, header_style="bold magenta")
        table.add_column("Task", style="bold white", no_wrap=True)
        table.add_column("Target", style="white")
        table.add_column("Status", no_wrap=True)
        table.add_column("Message", style="dim")
        for r in results:
            status = r.get("status", "")
            status_color = "green" if status == "Success" else "red"
            table.add_row(
                Text(r.get("task", "")),
                Text(r.get("target", "")),
                Text(status, style=status_color),
                Text(r.get("message", "")),
            )

        summary = Text.assemble((f"{succeeded}", "bold green"), (" succeeded ", "dim"), ("• ", "dim"), (f"{failed}", "bold red"), (" failed", "dim"))
        self.console.rule("[bold cyan]Done[/bold cyan]")
        self.console.print(table)
        self.console.print(summary, justify="center")

"""Output formatting utilities for CLI."""

import json
from enum import Enum
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text


class OutputFormat(Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


class OutputFormatter:
    """Handle output formatting for different formats."""

    def __init__(self, format_type: str = "table", console: Optional[Console] = None):
        """
        Initialize output formatter.

        Args:
            format_type: Output format (table, json, yaml)
            console: Console to print to
        """
        self.console = console or Console()
        try:
            self.format = OutputFormat(format_type.lower())
        except ValueError:
            self.format = OutputFormat.TABLE

    def _dump(self, data: Any):
        if self.format == OutputFormat.JSON:
            self.console.print_json(json.dumps(data, default=str))
        else:
            self.console.print(
                yaml.safe_dump(data, default_flow_style=False), end=""
            )

    def print_entries(self, entries: List[str], title: Optional[str] = None):
        """
        Print a list of path entries.

        Args:
            entries: Entries in tool order
            title: Table title (for table format)
        """
        if self.format != OutputFormat.TABLE:
            self._dump(entries)
            return

        if not entries:
            self.console.print("[dim]No entries found[/dim]")
            return

        table = Table(title=title, show_header=False, box=None)
        table.add_column("entry")
        for entry in entries:
            # Paths may contain [brackets]
            table.add_row(Text(entry))
        self.console.print(table)

    def print_detail(
        self,
        item: Dict[str, Any],
        title: Optional[str] = None,
    ):
        """
        Print detailed view of a single item.

        Args:
            item: Item to print
            title: Optional title
        """
        if self.format != OutputFormat.TABLE:
            self._dump(item)
            return

        if title:
            self.console.print(f"[bold]{title}[/bold]\n")

        for key, value in item.items():
            formatted_key = key.replace("_", " ").title()

            if value is None:
                formatted_value = "[dim]Not set[/dim]"
            elif isinstance(value, bool):
                formatted_value = "[green]Yes[/green]" if value else "[red]No[/red]"
            elif isinstance(value, (list, dict)):
                formatted_value = json.dumps(value, indent=2)
            else:
                formatted_value = str(value)

            self.console.print(f"[cyan]{formatted_key}:[/cyan] {formatted_value}")

    def print_success(self, message: str):
        """Print success message."""
        if self.format == OutputFormat.TABLE:
            self.console.print(f"[green]✓[/green] {escape(message)}")
        else:
            self._dump({"status": "success", "message": message})

    def print_error(self, message: str):
        """Print error message."""
        if self.format == OutputFormat.TABLE:
            self.console.print(f"[red]✗[/red] {escape(message)}")
        else:
            self._dump({"status": "error", "message": message})


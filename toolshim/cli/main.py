"""toolshim command-line interface."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from toolshim import __version__
from toolshim.cli.commands import archive, filesystem
from toolshim.cli.utils.context import CLIContext
from toolshim.cli.utils.output import OutputFormat, OutputFormatter
from toolshim.core.config import settings
from toolshim.core.exceptions import ConfigurationError
from toolshim.core.fs.operations import ToolFileSystem
from toolshim.core.shell.dialect import available_dialects, get_dialect
from toolshim.infrastructure.logging import setup_logging

app = typer.Typer(
    name="toolshim",
    help="toolshim - filesystem and archive operations through command-line tools",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    pretty_exceptions_enable=False,
)

console = Console()


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        console.print(f"toolshim v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Log every tool command",
    ),
    output_format: str = typer.Option(
        "table",
        "--output",
        "-o",
        help="Output format: table, json, yaml",
    ),
    shell: Optional[str] = typer.Option(
        None,
        "--shell",
        help=f"Shell family: auto, {', '.join(available_dialects())}",
    ),
    cwd: Optional[str] = typer.Option(
        None,
        "--cwd",
        "-C",
        help="Directory commands run in (default: process working directory)",
    ),
):
    """
    toolshim

    Runs filesystem and archive operations by invoking external tools,
    scoped to a directory without changing the process working directory.
    """
    setup_logging("DEBUG" if debug else None)

    formatter = OutputFormatter(output_format, console=console)

    try:
        dialect = get_dialect(shell or settings.shell)
    except ConfigurationError as e:
        formatter.print_error(e.message)
        raise typer.Exit(2)

    fs = ToolFileSystem(
        dialect=dialect,
        settings=settings,
        current_dir=(lambda: cwd) if cwd else None,
    )

    ctx.obj = CLIContext(
        fs=fs,
        formatter=formatter,
        console=console,
    )


app.add_typer(filesystem.app, name="fs", help="Filesystem operations")
app.add_typer(archive.app, name="archive", help="Archive extraction")


@app.command("config")
def config_command(ctx: typer.Context):
    """
    Show effective settings.

    Settings come from TOOLSHIM_* environment variables or a .env file.
    """
    cli_ctx: CLIContext = ctx.obj
    values = cli_ctx.fs.settings.model_dump()
    values["dialect"] = cli_ctx.fs.dialect.name

    if cli_ctx.formatter.format != OutputFormat.TABLE:
        cli_ctx.formatter.print_detail(values)
        return

    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for key, value in values.items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("doctor")
def doctor_command(ctx: typer.Context):
    """
    Check which external tools respond.
    """
    cli_ctx: CLIContext = ctx.obj
    fs = cli_ctx.fs
    console.print("[bold]toolshim doctor[/bold]\n")
    console.print(f"Shell family: [cyan]{fs.dialect.name}[/cyan]")

    decompressor = fs.prober.select(fs.archives.GZIP_PURPOSE, fs.archives.gzip_candidates())
    if decompressor:
        console.print(f"  [green]✓[/green] gzip decompressor: {decompressor.name}")
    else:
        console.print("  [red]✗[/red] no gzip decompressor found")

    # tar -h means --dereference and unzip has no --version
    tools = [
        (fs.settings.tar_command, "--version"),
        (fs.settings.unzip_command, "-v"),
        (fs.settings.bunzip2_command, "--help"),
        (fs.settings.wget_command, "--version"),
    ]
    missing = 0
    for tool, flag in tools:
        if fs.tool_responds(tool, flag):
            console.print(f"  [green]✓[/green] {tool}")
        else:
            missing += 1
            console.print(f"  [yellow]⚠[/yellow] {tool} did not respond to {flag}")

    if missing or decompressor is None:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

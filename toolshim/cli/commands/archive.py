"""Archive commands."""

import typer

from toolshim.cli.utils.context import CLIContext
from toolshim.core.archive.resolver import extension_of

app = typer.Typer(help="Archive extraction")


@app.command("unpack")
def unpack(
    ctx: typer.Context,
    archive: str = typer.Argument(..., help="Archive filename"),
):
    """
    Extract an archive into the current directory.

    The format is chosen by extension: .tar.gz, .tgz, .tar.bz2, .zip.
    .lua and .c files are accepted as already unpacked.

    Example:
        toolshim --cwd build archive unpack pkg-1.0.tar.gz
    """
    cli_ctx: CLIContext = ctx.obj
    result = cli_ctx.fs.unpack_archive(archive)
    if not result.ok:
        cli_ctx.fail(result.message or f"Failed extracting {archive}")
    cli_ctx.formatter.print_success(f"Unpacked {archive}")


@app.command("inspect")
def inspect(
    ctx: typer.Context,
    archive: str = typer.Argument(..., help="Archive filename"),
):
    """Show the extraction pipeline chosen for a filename without running it."""
    cli_ctx: CLIContext = ctx.obj
    descriptor = cli_ctx.fs.archives.resolve(archive)

    if descriptor is None:
        cli_ctx.fail(f"Unrecognized filename extension {extension_of(archive)}")

    cli_ctx.formatter.print_detail(
        {
            "archive": descriptor.archive,
            "format": descriptor.format.value,
            "stages": [stage.name for stage in descriptor.stages],
        },
        title=f"Archive: {archive}",
    )

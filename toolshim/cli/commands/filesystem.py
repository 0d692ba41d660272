"""Filesystem commands."""

from typing import Optional

import typer

from toolshim.cli.utils.context import CLIContext
from toolshim.core.exceptions import InvalidArgumentError

app = typer.Typer(help="Filesystem operations")


@app.command("exists")
def exists(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Path to test"),
):
    """
    Test whether a path exists.

    Example:
        toolshim fs exists build/output.txt
    """
    cli_ctx: CLIContext = ctx.obj
    cli_ctx.report(cli_ctx.fs.exists(path), f"{path} exists", f"{path} does not exist")


@app.command("is-dir")
def is_dir(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Path to test"),
):
    """Test whether a path is a directory."""
    cli_ctx: CLIContext = ctx.obj
    cli_ctx.report(cli_ctx.fs.is_dir(path), f"{path} is a directory", f"{path} is not a directory")


@app.command("mkdir")
def make_dir(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Directory to create"),
):
    """
    Create a directory and any missing parents.

    Always succeeds; check with is-dir when it matters.
    """
    cli_ctx: CLIContext = ctx.obj
    cli_ctx.fs.make_dir(directory)
    cli_ctx.formatter.print_success(f"Created {directory}")


@app.command("rmdir")
def remove_dir(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Directory to remove if empty"),
):
    """Remove a directory if it is empty (errors are ignored)."""
    cli_ctx: CLIContext = ctx.obj
    cli_ctx.fs.remove_dir_if_empty(directory)
    cli_ctx.formatter.print_success(f"Removed {directory} if it was empty")


@app.command("cp")
def copy(
    ctx: typer.Context,
    src: str = typer.Argument(..., help="Source file"),
    dest: str = typer.Argument(..., help="Destination file or directory"),
):
    """
    Copy a file.

    Example:
        toolshim fs cp rockspec.lua dist/
    """
    cli_ctx: CLIContext = ctx.obj
    result = cli_ctx.fs.copy(src, dest)
    cli_ctx.report(result.ok, f"Copied {src} to {dest}", result.message or "")


@app.command("cp-contents")
def copy_contents(
    ctx: typer.Context,
    src: str = typer.Argument(..., help="Source directory"),
    dest: str = typer.Argument(..., help="Destination directory"),
):
    """Recursively copy the contents of a directory."""
    cli_ctx: CLIContext = ctx.obj
    result = cli_ctx.fs.copy_contents(src, dest)
    cli_ctx.report(result.ok, f"Copied contents of {src} to {dest}", result.message or "")


@app.command("rm")
def delete(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Absolute path to delete"),
):
    """
    Delete a file or directory tree.

    Only absolute paths are accepted.
    """
    cli_ctx: CLIContext = ctx.obj
    try:
        ok = cli_ctx.fs.delete(path)
    except InvalidArgumentError as e:
        cli_ctx.fail(e.message, code=2)
    cli_ctx.report(ok, f"Deleted {path}", f"Failed deleting {path}")


@app.command("ls")
def list_dir(
    ctx: typer.Context,
    at: Optional[str] = typer.Argument(None, help="Directory to list (default: current)"),
):
    """List the entries of a directory."""
    cli_ctx: CLIContext = ctx.obj
    cli_ctx.formatter.print_entries(cli_ctx.fs.list_dir(at), title=at)


@app.command("find")
def find(
    ctx: typer.Context,
    at: Optional[str] = typer.Argument(None, help="Directory to scan (default: current)"),
):
    """Recursively list a directory with forward-slash relative paths."""
    cli_ctx: CLIContext = ctx.obj
    cli_ctx.formatter.print_entries(cli_ctx.fs.find(at), title=at)


@app.command("download")
def download(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL to fetch"),
    filename: Optional[str] = typer.Option(
        None, "--output-document", "-O", help="Local filename (default: URL basename)"
    ),
):
    """
    Download a remote file, resuming a partial download.

    Example:
        toolshim fs download https://example.com/pkg-1.0.tar.gz
    """
    cli_ctx: CLIContext = ctx.obj
    cli_ctx.report(
        cli_ctx.fs.download(url, filename),
        f"Downloaded {url}",
        f"Failed downloading {url}",
    )

"""Glacier CLI - Main commands."""
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="glacier",
    help="Upload archives to Amazon S3 Glacier",
    add_completion=False
)
console = Console()
err_console = Console(stderr=True)


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def configure_logging(level_name: str) -> None:
    """Send glacierpy logs to stderr through rich at the given level."""
    from glacierpy import setup_logging
    from glacierpy.core.logging import resolve_level

    level = resolve_level(level_name)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True
    )
    setup_logging(level)


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="File to upload"),
    description: str = typer.Option(None, "--description", "-d", help="Optional archive description"),
    size: float = typer.Option(None, "--size", "-s", help="Size of upload parts in MB"),
    concurrency: int = typer.Option(None, "--concurrency", "-c", help="Number of parts to upload simultaneously"),
    vault_name: str = typer.Option(None, "--vault-name", "-n", help="Glacier vault name to upload the archive to"),
    log_level: str = typer.Option("info", "--log-level", "-l", help="error, warn, info, verbose, debug, silly"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Skip the actual file upload"),
    region: str = typer.Option(None, "--region", help="AWS region (default: from AWS configuration)"),
    retries: int = typer.Option(5, "--retries", help="Retries per failed part"),
    retry_interval: int = typer.Option(0, "--retry-interval", help="Delay between part retries in ms"),
):
    """Upload a file to Glacier."""
    from glacierpy import GlacierUploader, APIConfig, UploadConfig, RetryPolicy
    from glacierpy.core.exceptions import ConfigError, UploadError

    try:
        config = UploadConfig.from_options(
            size_mb=size,
            concurrency=concurrency,
            vault_name=vault_name,
            description=description,
            dry_run=dry_run,
            retry=RetryPolicy(times=retries, interval_ms=retry_interval),
            log_level=log_level
        )
    except ConfigError as e:
        err_console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    configure_logging(config.log_level)

    async def do_upload():
        async with GlacierUploader(config, APIConfig(region=region)) as glacier:
            return await glacier.upload(file_path)

    try:
        result = run_async(do_upload())
    except UploadError as e:
        err_console.print(f"[red]Upload failed: {e.message}[/red]")
        raise typer.Exit(1)

    if config.dry_run:
        console.print("[yellow]Dry run: nothing was uploaded[/yellow]")
    console.print(f"[green]Archive ID:[/green] {result.archive_id}")


@app.command("tree-hash")
def tree_hash(
    file_path: Optional[Path] = typer.Argument(None, help="File to hash (default: stdin)"),
):
    """Print the Glacier tree hash of a file or of stdin."""
    from glacierpy.core.hashing import TreeHashCalculator

    try:
        data = file_path.read_bytes() if file_path else sys.stdin.buffer.read()
    except OSError as e:
        err_console.print(f"[red]Failed to read input: {e}[/red]")
        raise typer.Exit(1)

    typer.echo(TreeHashCalculator().compute(data))


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()

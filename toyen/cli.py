"""
toyen CLI.

Command-line interface for compiling declaration files into a Ninja build.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.config import Config
from .core.exceptions import ToyenError
from .core.logging import setup_logging

app = typer.Typer(
    name="toyen",
    help="Compile declarative build descriptions into a self-regenerating Ninja build",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"toyen v{__version__}")
        raise typer.Exit()


def print_errors(messages: list[str]) -> None:
    for message in messages:
        console.print(f"[bold red]error:[/bold red] {escape(message)}", highlight=False)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """toyen: declarative build-description compiler."""
    pass


@app.command()
def build(
    blueprint: Path = typer.Argument(
        ...,
        help="Root declaration file",
        dir_okay=False,
    ),
    src_dir: Path = typer.Option(
        Path("."),
        "--src",
        help="The source directory",
    ),
    out_dir: Path = typer.Option(
        Path("."),
        "--out",
        help="The build output directory; build.ninja is written here",
    ),
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Triple of the platform build tools run on (default: this machine)",
    ),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        help="Triple of the platform being built for",
    ),
    jobs: Optional[int] = typer.Option(
        None,
        "--jobs",
        "-j",
        min=1,
        help="Number of parallel jobs for make and ninja sub-builds",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the build file instead of writing it",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Compile BLUEPRINT and write build.ninja and its depfile."""
    try:
        config = Config.from_env(
            src_dir=src_dir,
            out_dir=out_dir,
            host_triple=host,
            target_triple=target,
            jobs=jobs,
            log_level="DEBUG" if verbose else None,
        )
    except ToyenError as e:
        print_errors([str(e)])
        raise typer.Exit(1)
    setup_logging(config)

    async def run_async() -> None:
        from .emission import MemoryEmissionBackend
        from .orchestration import run_pipeline

        emitter = MemoryEmissionBackend() if dry_run else None
        result = await run_pipeline(blueprint, config=config, emitter=emitter)

        if not result.success:
            print_errors(result.errors)
            raise typer.Exit(1)

        if emitter is not None:
            typer.echo(emitter.files[config.build_file], nl=False)
            return

        console.print(
            f"[green]✓[/green] Wrote {result.build_file} "
            f"({result.modules} modules, {result.actions} actions)"
        )

    asyncio.run(run_async())


@app.command()
def kinds() -> None:
    """List the module kinds toyen can compile and their properties."""
    from .registry import create_registry

    try:
        config = Config.from_env()
    except ToyenError as e:
        print_errors([str(e)])
        raise typer.Exit(1)
    registry = create_registry(config)

    table = Table(title="Module Kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Properties")

    for kind in registry.kinds():
        model = registry.compiler_for(kind).properties_model
        fields = [
            f"[bold]{name}[/bold]" if info.is_required() else name
            for name, info in model.model_fields.items()
        ]
        table.add_row(kind, ", ".join(fields) or "[dim]none[/dim]")

    console.print(table)
    console.print("\n[dim]Required properties are shown in bold.[/dim]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

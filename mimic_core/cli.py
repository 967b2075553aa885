"""mimic CLI - inspect the repository, files and trees a build runs against."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.table import Table

from mimic_core import __version__
from mimic_core.exceptions import AllFailedError
from mimic_core.exceptions import MalformedMetadataError
from mimic_core.exceptions import RepositoryNotFoundError
from mimic_core.exceptions import SettingsError
from mimic_core.git import detect_repository
from mimic_core.race import read_first_available
from mimic_core.settings import ProbeSettings
from mimic_core.settings import SettingsPaths
from mimic_core.settings import load_settings
from mimic_core.tree import collect_tree

logger = logging.getLogger(__name__)

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@click.group()
@click.version_option(version=__version__, prog_name="mimic")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Project settings file (replaces ./.mimic/settings.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None):
    """Inspect repositories and file trees.

    Examples:
        mimic git
        mimic collect src --ext .py
        mimic first README.md README.txt
    """
    _setup_logging(verbose)

    paths = SettingsPaths.default()
    if config_path:
        paths.project_settings = config_path
    try:
        ctx.obj = load_settings(paths)
    except (SettingsError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid settings: {e}") from e


@cli.command("git")
@click.argument("start", required=False, type=click.Path(path_type=Path))
@click.pass_obj
def git_cmd(settings: ProbeSettings, start: Path | None):
    """Show root, branch and commit of the enclosing repository.

    START is a file or directory inside the project (default: current directory).
    """
    try:
        meta = asyncio.run(
            detect_repository(
                start or Path.cwd(),
                max_depth=settings.max_depth,
                marker=settings.marker,
                inclusive=True,
            )
        )
    except (RepositoryNotFoundError, MalformedMetadataError) as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Failed to read repository metadata: {e}") from e

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("Root", str(meta.root))
    table.add_row("Branch", f"[bold]{meta.branch}[/bold]")
    table.add_row("Commit", meta.commit)
    console.print(table)


@cli.command("collect")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--ext", "extensions", multiple=True, help="Only collect files with this extension (repeatable)")
@click.option("--show-content", is_flag=True, help="Print file contents after the summary")
@click.pass_obj
def collect_cmd(settings: ProbeSettings, path: Path, extensions: tuple[str, ...], show_content: bool):
    """Collect the text of every file under PATH."""
    extension = extensions or settings.extension_filter
    try:
        files = asyncio.run(collect_tree(path, extension))
    except OSError as e:
        raise click.ClickException(f"Failed to collect {path}: {e}") from e

    if not files:
        console.print("[yellow]No matching files[/yellow]")
        return

    table = Table(title=f"Files under {path}", show_header=True, header_style="bold cyan")
    table.add_column("Path", style="green")
    table.add_column("Chars", justify="right")
    for file_path in sorted(files):
        table.add_row(str(file_path), str(len(files[file_path])))
    console.print(table)

    if show_content:
        for file_path in sorted(files):
            console.rule(str(file_path))
            console.print(files[file_path], markup=False, highlight=False)


@cli.command("first")
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.pass_obj
def first_cmd(settings: ProbeSettings, paths: tuple[Path, ...]):
    """Print the first readable file among PATHS.

    Falls back to the configured candidates when no PATHS are given.
    """
    candidates = list(paths) or [Path(c) for c in settings.candidates]
    if not candidates:
        raise click.UsageError("No candidate paths given and none configured")

    try:
        hit = asyncio.run(read_first_available(candidates))
    except AllFailedError as e:
        lines = [f"None of {len(candidates)} candidate(s) could be read:"]
        lines += [f"  {path}: {error}" for path, error in zip(candidates, e.errors)]
        raise click.ClickException("\n".join(lines)) from e

    console.print(f"[dim]{hit.path}[/dim]")
    console.print(hit.content, markup=False, highlight=False, end="")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

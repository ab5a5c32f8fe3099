"""``skills`` command line interface."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from skills_hub import __version__
from skills_hub.config import get_settings
from skills_hub.core.exceptions import SkillsHubError
from skills_hub.core.logging.logger import configure_logging
from skills_hub.marketplace.formatting import (
    format_content_hash_short,
    format_installed_at_display,
)
from skills_hub.marketplace.source_utils import format_repository_display_url
from skills_hub.platforms.registry import default_formatter_registry
from skills_hub.skills.manager import SkillManager
from skills_hub.skills.models import InstallOptions

if TYPE_CHECKING:
    from skills_hub.config import Settings

app = typer.Typer(
    name="skills",
    help="Install AI development skills from GitHub into your editor.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
error_console = Console(stderr=True)

EXAMPLE_REPO = "https://github.com/Axxr/skills-hub"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"skills {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    try:
        settings = get_settings()
    except SkillsHubError as exc:
        _fail(exc)
    configure_logging("debug" if verbose else settings.logger.level, console=error_console)


def _fail(error: Exception) -> NoReturn:
    error_console.print(f"[red]✗[/red] {escape(str(error))}", highlight=False)
    raise typer.Exit(code=1)


def _manager(settings: Settings | None = None) -> SkillManager:
    return SkillManager(settings=settings or get_settings())


@app.command("add")
def add_command(
    repo_url: str = typer.Argument(..., help="GitHub repository URL"),
    skill: str = typer.Option(..., "--skill", help="Skill ID to install"),
    platform: str | None = typer.Option(
        None,
        "--platform",
        "-p",
        help=f"Target platform ({', '.join(default_formatter_registry().platforms)})",
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output directory (default: current directory)"
    ),
) -> None:
    """Install a skill from a GitHub repository."""
    settings = get_settings()
    manager = _manager(settings)
    options = InstallOptions(
        repo_url=repo_url,
        skill_id=skill,
        platform=platform,
        output_dir=output or settings.output_dir,
    )
    try:
        with console.status(f'Fetching "{escape(skill)}" from {escape(repo_url)}...'):
            result = asyncio.run(manager.install(options))
    except SkillsHubError as exc:
        _fail(exc)
    except OSError as exc:
        _fail(exc)

    console.print()
    console.print(
        f"[green]✓[/green] Installed {escape(result.skill_name)} v{escape(result.version)}"
    )
    console.print(f"[blue]ℹ[/blue] Platform : {result.platform}")
    console.print(f"[blue]ℹ[/blue] File     : {escape(str(result.output_file))}")
    console.print(f"[blue]ℹ[/blue] Config   : {escape(str(result.config_path))}")
    console.print(
        f"[blue]ℹ[/blue] Integrity: sha-256 {format_content_hash_short(result.content_hash)}"
    )
    console.print()


@app.command("list")
def list_command() -> None:
    """List locally installed skills."""
    try:
        records = _manager().list_installed()
    except SkillsHubError as exc:
        _fail(exc)

    console.print()
    console.print("[bold green]> Installed Skills[/bold green]")
    console.print()
    if not records:
        console.print("[yellow]⚠[/yellow] No skills installed yet")
        console.print()
        console.print("Install a skill with:")
        console.print(f"  [dim]skills add {EXAMPLE_REPO} --skill <id>[/dim]", highlight=False)
        console.print()
        return

    for record in records:
        console.print(
            f"  [green]●[/green] [bold]{escape(record.id)}[/bold] "
            f"[dim]v{escape(record.version)}[/dim]"
        )
        console.print(f"    [dim]platform : {record.platform}[/dim]")
        console.print(
            f"    [dim]source   : {escape(format_repository_display_url(record.source))}[/dim]",
            highlight=False,
        )
        console.print(
            f"    [dim]installed: {format_installed_at_display(record.installed_at)}[/dim]"
        )
        console.print(
            f"    [dim]hash     : {format_content_hash_short(record.content_hash)}[/dim]"
        )
        console.print()

    console.print(f"[blue]ℹ[/blue] Total: {len(records)} skill(s)")
    console.print()
    console.print("Remove a skill with:")
    console.print("  [dim]skills remove <skill-id>[/dim]")
    console.print()


@app.command("remove")
def remove_command(
    skill_id: str = typer.Argument(..., help="ID of the installed skill"),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory where skill files are installed (default: current directory)",
    ),
) -> None:
    """Remove an installed skill."""
    settings = get_settings()
    try:
        result = _manager(settings).remove(skill_id, output_dir=output or settings.output_dir)
    except SkillsHubError as exc:
        _fail(exc)
    except OSError as exc:
        _fail(exc)

    if result.file_removed:
        console.print(f"[green]✓[/green] Removed file: {escape(str(result.output_file))}")
    console.print()
    console.print(f"[green]✓[/green] Removed skill: {escape(result.skill_id)}")
    console.print()

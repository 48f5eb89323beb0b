"""
AppForge CLI.

Command-line interface for generating, editing and managing apps.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, Optional, TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from .core.config import Config, get_config
from .core.exceptions import AppForgeError
from .core.logging import setup_logging
from .core.types import ServiceResult

app = typer.Typer(
    name="appforge",
    help="Generate single-component web apps from natural-language descriptions",
    add_completion=False,
)
image_app = typer.Typer(help="Generate and edit images", add_completion=False)
app.add_typer(image_app, name="image")

console = Console()

T = TypeVar("T")

ProviderOption = typer.Option(
    None,
    "--provider",
    "-p",
    help="AI provider (claude, gemini, openai, anthropic); configured default if omitted",
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"AppForge v{__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """AppForge: natural language to validated React components."""
    try:
        config = get_config()
    except PydanticValidationError as e:
        console.print("[bold red]✗ Invalid configuration:[/bold red]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"  {field}: {error['msg']}")
        raise typer.Exit(1) from e
    if verbose:
        config.log_level = "DEBUG"
    setup_logging(config)


def _services(config: Config | None = None):
    from .services import build_services

    try:
        return build_services(config or get_config())
    except AppForgeError as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {e.message}")
        raise typer.Exit(1) from e


def _run(coro: Coroutine[Any, Any, ServiceResult[T]], status: str) -> ServiceResult[T]:
    """Run a service coroutine behind a spinner and exit non-zero on failure."""

    async def run_async() -> ServiceResult[T]:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(status, total=None)
            return await coro

    result = asyncio.run(run_async())

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    if not result.success:
        console.print(f"\n[bold red]✗ {result.error}[/bold red]")
        if result.error_type:
            console.print(f"[dim]{result.error_type}[/dim]")
        if result.details:
            console.print(Panel(result.details.strip(), title="Details", border_style="red"))
        raise typer.Exit(1)

    return result


@app.command()
def create(
    description: str = typer.Argument(..., help="What the app should do"),
    provider: Optional[str] = ProviderOption,
) -> None:
    """Generate a new app from a description."""
    services = _services()
    result = _run(services.generation.create_app(description, provider), "Generating app...")
    created = result.data

    console.print("\n[bold green]✓ App created![/bold green]\n")
    table = Table(title=created.name)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("ID", created.id)
    table.add_row("Component", created.component_name)
    table.add_row("File", str(services.config.storage.apps_dir / created.file_name))
    table.add_row("Description", created.description)
    table.add_row("Provider", created.ai_provider)
    table.add_row("Duration", f"{result.duration_ms / 1000:.1f}s")
    console.print(table)


@app.command()
def edit(
    app_id: str = typer.Argument(..., help="Catalog id of the app"),
    instructions: str = typer.Argument(..., help="Change to make"),
    provider: Optional[str] = ProviderOption,
    rollback: Optional[bool] = typer.Option(
        None,
        "--rollback/--no-rollback",
        help="Keep the previous source if the edit fails validation",
    ),
) -> None:
    """Rewrite an existing app according to instructions."""
    config = get_config()
    if rollback is not None:
        config = config.model_copy(
            update={"pipeline": config.pipeline.model_copy(update={"rollback_failed_edits": rollback})}
        )
    services = _services(config)

    async def edit_async() -> ServiceResult:
        result = await services.generation.edit_app(app_id, instructions, provider)
        if not result.success and result.data is not None:
            state = "kept the previous source" if result.data.rolled_back else "left the new source in place"
            console.print(f"[yellow]Edit {state}[/yellow]")
        return result

    result = _run(edit_async(), "Editing app...")
    console.print(f"\n[bold green]✓ Updated {result.data.file_name}[/bold green] with {result.data.ai_provider}")


@app.command("list")
def list_apps() -> None:
    """List generated apps."""
    result = _run(_services().generation.list_apps(), "Reading catalog...")

    if not result.data:
        console.print("[dim]No apps yet. Create one with 'appforge create'.[/dim]")
        return

    table = Table(title="Generated Apps")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("File")
    table.add_column("Provider")
    table.add_column("Created")
    for entry in result.data:
        table.add_row(
            entry.id,
            entry.name,
            entry.file_name,
            entry.ai_provider,
            entry.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@app.command()
def delete(
    app_id: str = typer.Argument(..., help="Catalog id of the app"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete an app and its catalog entry."""
    if not yes:
        typer.confirm(f"Delete app {app_id}?", abort=True)
    result = _run(_services().generation.delete_app(app_id), "Deleting app...")
    console.print(f"[bold green]✓ Deleted {result.data.name}[/bold green] ({result.data.file_name})")


@app.command()
def improve(
    idea: str = typer.Argument(..., help="Rough app idea"),
    provider: Optional[str] = ProviderOption,
) -> None:
    """Turn a rough idea into a detailed app description."""
    result = _run(_services().generation.improve_prompt(idea, provider), "Improving prompt...")
    console.print(Panel(result.data, title="Improved description", border_style="green"))


@app.command()
def probe(
    provider: Optional[str] = typer.Argument(None, help="Provider to test"),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Prompt to send"),
) -> None:
    """Check that a provider responds."""
    from .services.generation import DEFAULT_PROBE_PROMPT

    result = _run(
        _services().generation.probe_provider(provider, prompt or DEFAULT_PROBE_PROMPT),
        "Contacting provider...",
    )
    name = result.metadata.get("provider") or provider
    console.print(f"[bold green]✓ {name} responded:[/bold green]\n{result.data}")


@image_app.command("generate")
def image_generate(
    prompt: str = typer.Argument(..., help="Image description"),
    aspect_ratio: str = typer.Option("16:9", "--aspect-ratio", "-a", help="Aspect ratio"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the image to this file instead of the served image directory",
    ),
) -> None:
    """Generate an image from a prompt."""
    return_format = "base64" if output else "url"
    result = _run(
        _services().images.generate_image(prompt, aspect_ratio, return_format),
        "Generating image...",
    )
    _report_image(result, output)


@image_app.command("edit")
def image_edit(
    prompt: str = typer.Argument(..., help="Edit instructions"),
    input_path: Path = typer.Argument(
        ...,
        help="Image to edit",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the image to this file instead of the served image directory",
    ),
) -> None:
    """Edit an existing image according to a prompt."""
    mime_type = mimetypes.guess_type(input_path.name)[0] or "image/png"
    encoded = base64.b64encode(input_path.read_bytes()).decode("ascii")
    return_format = "base64" if output else "url"
    result = _run(
        _services().images.edit_image(prompt, f"data:{mime_type};base64,{encoded}", return_format),
        "Editing image...",
    )
    _report_image(result, output)


def _report_image(result: ServiceResult, output: Path | None) -> None:
    image = result.data
    if output is not None:
        output.write_bytes(base64.b64decode(image.image))
        console.print(f"[bold green]✓ Image written to {output}[/bold green] ({image.mime_type})")
    else:
        console.print(f"[bold green]✓ Image saved:[/bold green] {image.image_url}")


@app.command()
def show(app_id: str = typer.Argument(..., help="Catalog id of the app")) -> None:
    """Print an app's generated source."""
    services = _services()

    async def load() -> tuple[str, str] | None:
        entry = await services.generation.catalog.find_by_id(app_id)
        if entry is None:
            return None
        return entry.file_name, await services.generation.artifacts.load_text(entry.file_name)

    try:
        loaded = asyncio.run(load())
    except AppForgeError as e:
        console.print(f"[bold red]✗ {e.message}[/bold red]")
        raise typer.Exit(1) from e
    if loaded is None:
        console.print("[bold red]✗ App not found[/bold red]")
        raise typer.Exit(1)

    file_name, source = loaded
    console.print(Syntax(source, "tsx", line_numbers=True, theme="ansi_dark"), soft_wrap=True)
    console.print(f"[dim]{file_name}[/dim]")


@app.command()
def config() -> None:
    """Show current configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Deployment", cfg.provider.deployment)
    table.add_row("Default Provider", cfg.provider.default_provider)
    table.add_row("Enhanced Providers", ", ".join(cfg.provider.enhanced_providers))
    table.add_row("Gemini Model", cfg.provider.gemini_model)
    table.add_row("Gemini Image Model", cfg.provider.gemini_image_model)
    table.add_row("OpenAI Model", cfg.provider.openai_model)
    table.add_row("Anthropic Model", cfg.provider.anthropic_model)
    table.add_row("Local Agent", " ".join(cfg.provider.local_agent_command))
    table.add_row("Checker", " ".join(cfg.validator.command) if cfg.validator.enabled else "disabled")
    table.add_row("Apps Directory", str(cfg.storage.apps_dir))
    table.add_row("Images Directory", str(cfg.storage.images_dir))
    table.add_row("Rollback Failed Edits", str(cfg.pipeline.rollback_failed_edits))
    table.add_row("Gemini Key", "set" if cfg.gemini_api_key else "[yellow]missing[/yellow]")
    table.add_row("OpenAI Key", "set" if cfg.openai_api_key else "[yellow]missing[/yellow]")
    table.add_row("Anthropic Key", "set" if cfg.anthropic_api_key else "[yellow]missing[/yellow]")

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  APPFORGE_DEPLOYMENT, APPFORGE_DEFAULT_PROVIDER, APPFORGE_LOG_LEVEL")
    console.print("  APPFORGE_APPS_DIR, APPFORGE_CHECKER_COMMAND, APPFORGE_ROLLBACK_FAILED_EDITS")
    console.print("  GEMINI_API_KEY, OPENAI_API_KEY, ANTHROPIC_API_KEY")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

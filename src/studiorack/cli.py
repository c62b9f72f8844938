"""CLI entry point for StudioRack."""

import asyncio
import sys
from pathlib import Path

import typer
from rich.console import Console

from studiorack.config.logging import setup_logging
from studiorack.config.manager import ConfigManager
from studiorack.config.schema import Settings
from studiorack.output.presenter import render_search_results
from studiorack.plugins import (
    DEFAULT_TEMPLATE,
    TEMPLATE_TYPES,
    PluginManager,
    RegistryClient,
    create_plugin,
)
from studiorack.project import (
    ProjectManager,
    ReconcileReport,
    reconcile_install,
    reconcile_uninstall,
)
from studiorack.utils.errors import ConfigError
from studiorack.validation import (
    ValidateOptions,
    ValidatorTool,
    validate_batch,
)

app = typer.Typer(
    name="studiorack",
    help="Create, install, validate and manage audio plugins",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)
console = Console()

DEFAULT_PLUGIN_GLOB = "**/*.{vst,vst3}"


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """StudioRack - manage the audio plugins of a music project."""
    try:
        settings = ConfigManager().load_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        sys.exit(1)

    # Initialize logging before any command runs
    setup_logging(verbose=verbose, log_file=log_file, level=settings.log_level)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else ConfigManager().load_config()


def _project_manager(settings: Settings) -> ProjectManager:
    return ProjectManager(Path.cwd(), filename=settings.project_file)


def _plugin_manager(settings: Settings, project_dir: Path) -> PluginManager:
    local_dir = settings.local_plugin_dir
    if not local_dir.is_absolute():
        local_dir = project_dir / local_dir
    return PluginManager(
        RegistryClient(settings.registry_url),
        local_dir=local_dir,
        global_dir=settings.global_plugin_dir.expanduser(),
    )


def _print_report(report: ReconcileReport, token: str | None) -> None:
    """Summarize an install/uninstall run."""
    verb = "Installed" if report.action == "install" else "Uninstalled"

    if token:
        if report.succeeded:
            plugin_id = report.succeeded[0]
            version = report.project.plugins.get(plugin_id, "")
            suffix = f"@{version}" if version else ""
            console.print(f"[green]✓[/green] {verb} [bold]{plugin_id}{suffix}[/bold]")
        else:
            console.print(f"[yellow]No changes for {token}[/yellow]")
        return

    if report.processed == 0:
        console.print("[yellow]No plugins listed in the project.[/yellow]")
        return

    for plugin_id in report.succeeded:
        console.print(f"[green]✓[/green] {verb} {plugin_id}")
    for plugin_id in report.skipped:
        console.print(f"[dim]- {plugin_id} (nothing to do)[/dim]")
    for plugin_id, error in report.failed.items():
        console.print(f"[red]✗[/red] {plugin_id}: {error}")

    console.print(
        f"\n[dim]{len(report.succeeded)} {verb.lower()}, {len(report.skipped)} unchanged, "
        f"{len(report.failed)} failed[/dim]"
    )


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from studiorack import __version__

    console.print(f"[bold cyan]StudioRack CLI[/bold cyan] v{__version__}")


@app.command("create")
def create_command(
    ctx: typer.Context,
    folder: Path = typer.Argument(..., help="Folder to create"),
    template: str = typer.Option(
        DEFAULT_TEMPLATE,
        "--type",
        "-t",
        help=f"Template type ({', '.join(TEMPLATE_TYPES)})",
    ),
) -> None:
    """Create a new folder using the plugin starter template.

    Examples:
        studiorack create my-delay

        studiorack create my-synth --type juce
    """
    if template not in TEMPLATE_TYPES:
        console.print(f"[red]✗[/red] Unknown template type: {template}")
        console.print(f"Valid types: {', '.join(TEMPLATE_TYPES)}")
        sys.exit(1)

    settings = _settings(ctx)
    files = asyncio.run(create_plugin(folder, template, settings.template_url))

    console.print(
        f"[green]✓[/green] Created [bold]{folder}[/bold] from the {template} template "
        f"[dim]({len(files)} files)[/dim]"
    )


@app.command("init")
def init_command(ctx: typer.Context) -> None:
    """Set up a new or existing StudioRack project."""
    store = _project_manager(_settings(ctx))
    project = store.load()

    project.name = typer.prompt("Name", default=project.name)
    project.id = project.id or project.name
    project.version = typer.prompt("Version", default=project.version)
    project.description = typer.prompt(
        "Description", default=project.description, show_default=False
    )
    project.main = typer.prompt("Main file", default=project.main or "song.als")

    path = store.save(project)
    console.print(f"\n[green]✓[/green] Project saved to {path}")


@app.command("install")
def install_command(
    ctx: typer.Context,
    plugin: str | None = typer.Argument(
        None, help="Plugin id, optionally with @version (all project plugins if omitted)"
    ),
    is_global: bool = typer.Option(
        False, "--global", "-g", help="Install the plugin globally rather than locally"
    ),
) -> None:
    """Install a plugin and update project config.

    Examples:
        studiorack install studiorack/mda/adelay

        studiorack install studiorack/mda/adelay@1.0.0 --global

        studiorack install  # Install everything listed in project.json
    """
    settings = _settings(ctx)
    store = _project_manager(settings)
    installer = _plugin_manager(settings, store.project_dir)

    async def run_install() -> ReconcileReport:
        project = store.load()
        return await reconcile_install(project, plugin, is_global, installer, store)

    _print_report(asyncio.run(run_install()), plugin)


@app.command("uninstall")
def uninstall_command(
    ctx: typer.Context,
    plugin: str | None = typer.Argument(
        None, help="Plugin id, optionally with @version (all project plugins if omitted)"
    ),
    is_global: bool = typer.Option(
        False, "--global", "-g", help="Uninstall the plugin globally rather than locally"
    ),
) -> None:
    """Uninstall a plugin and update project config.

    Without a version, the version recorded in project.json is removed.
    """
    settings = _settings(ctx)
    store = _project_manager(settings)
    installer = _plugin_manager(settings, store.project_dir)

    async def run_uninstall() -> ReconcileReport:
        project = store.load()
        return await reconcile_uninstall(project, plugin, is_global, installer, store)

    _print_report(asyncio.run(run_uninstall()), plugin)


@app.command("search")
def search_command(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to search for"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output results as json"),
) -> None:
    """Search plugin registry by query."""
    registry = RegistryClient(_settings(ctx).registry_url)
    results = asyncio.run(registry.search(query))
    render_search_results(results, console, as_json=as_json)


@app.command("start")
def start_command(
    ctx: typer.Context,
    path: str | None = typer.Argument(None, help="File to open (defaults to the project main)"),
) -> None:
    """Start music project using the project config."""
    target = path
    if not target:
        target = _project_manager(_settings(ctx)).load().main

    if not target:
        console.print("[red]✗[/red] No file given and project.json has no main file")
        console.print("\nSet one with: [cyan]studiorack init[/cyan]")
        sys.exit(1)

    console.print(f"[cyan]→[/cyan] Opening {target}")
    typer.launch(target)


@app.command("validate")
def validate_command(
    ctx: typer.Context,
    path: str | None = typer.Argument(
        None, help="Plugin path or glob, e.g. './plugins/**/*.{vst,vst3}'"
    ),
    files: bool = typer.Option(
        False, "--files", "-f", help="Add files (audio, video and platform)"
    ),
    plugin_json: bool = typer.Option(False, "--json", "-j", help="Write a plugin json file"),
    summary: bool = typer.Option(
        False, "--summary", "-s", help="Write a plugins summary json file"
    ),
    txt: bool = typer.Option(False, "--txt", "-t", help="Write a plugin txt file"),
    make_zip: bool = typer.Option(False, "--zip", "-z", help="Create a zip file of the plugin"),
) -> None:
    """Validate a plugin using the Steinberg VST3 SDK validator.

    Examples:
        studiorack validate ./plugins/adelay.vst3 --json

        studiorack validate './plugins/**/*.{vst,vst3}' --summary
    """
    settings = _settings(ctx)
    target = path or f"{settings.local_plugin_dir.as_posix().rstrip('/')}/{DEFAULT_PLUGIN_GLOB}"
    options = ValidateOptions(
        files=files, json=plugin_json, summary=summary, txt=txt, zip=make_zip
    )
    validator = ValidatorTool(settings.validator_path.expanduser(), settings.validator_url)

    report = asyncio.run(validate_batch(target, options, validator))

    for result in report.rack.plugins:
        name = result.name or result.id or result.path
        console.print(f"[green]✓[/green] {name} [dim]{result.version}[/dim]  {result.path}")

    console.print(
        f"\n[dim]{len(report.rack.plugins)} of {report.scanned} paths recognised as plugins[/dim]"
    )
    if report.summary_path:
        console.print(f"Generated: {report.summary_path}")


if __name__ == "__main__":
    app()

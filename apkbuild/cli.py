"""Thin CLI wrapper for apkbuild.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from apkbuild import __version__
from apkbuild.config import Settings, get_settings, print_settings_json
from apkbuild.context import BuildContext

app = typer.Typer(
    name="apkbuild",
    help="Android build logic - resolve build parameters, configs and checksums",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _print_data(text: str) -> None:
    """Print machine-readable output without wrapping or markup."""
    console.print(text, soft_wrap=True, markup=False, highlight=False)


def _settings_with(
    root: Path | None = None,
    project: str | None = None,
) -> Settings:
    settings = get_settings()
    update: dict[str, object] = {}
    if root is not None:
        update["project_root"] = root
    if project is not None:
        update["project_name"] = project
    return settings.model_copy(update=update) if update else settings


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"apkbuild version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Override the configured log level"),
    ] = None,
) -> None:
    """Android build logic - resolve build parameters, configs and checksums."""
    level = (log_level or get_settings().log_level).upper()
    _setup_logging(level)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        _print_data(print_settings_json(settings))
        return

    def _state(value: object) -> str:
        return "(set)" if value is not None else "(unset)"

    console.print("[bold]Effective Configuration:[/bold]")
    console.print()
    console.print("[bold]Project:[/bold]")
    console.print(f"  Project root:        {settings.project_root}")
    console.print(f"  Module name:         {settings.project_name}")
    console.print(f"  Display name:        {settings.display_name}")
    console.print(f"  APK output root:     {settings.effective_apk_root}")
    console.print(f"  Native jobs:         {settings.effective_native_jobs}")
    console.print(f"  Log level:           {settings.log_level}")
    console.print()
    console.print("[bold]Signing:[/bold]")
    console.print(f"  Keystore password:   {_state(settings.keystore_pass)}")
    console.print(f"  Key alias:           {settings.alias_name or '(unset)'}")
    console.print(f"  Key password:        {_state(settings.alias_pass)}")
    console.print(f"  Local properties:    {_state(settings.local_properties_b64)}")
    console.print()
    console.print("[bold]Build:[/bold]")
    console.print(f"  Minify disabled:     {settings.minify_disabled}")
    console.print()
    console.print("[bold]CI / Publishing:[/bold]")
    console.print(f"  CI env file:         {settings.ci_env_file or '(unset)'}")
    console.print(f"  Publisher creds:     {_state(settings.publisher_credentials)}")


@app.command()
def resolve(
    tasks: Annotated[
        list[str] | None,
        typer.Argument(help="Requested task names, in invocation order"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Resolve flavor, target ABI and release-ness from task names."""
    ctx = BuildContext.from_tasks(tasks)
    summary = ctx.summary()

    if json_output:
        _print_data(json.dumps(summary, indent=2))
        return

    console.print(f"Flavor:      {ctx.flavor or '(none)'}")
    console.print(f"Target ABI:  {ctx.target_abi.value or '(all)'}")
    console.print(f"Release:     {ctx.is_release}")


@app.command()
def plan(
    kind: Annotated[
        str,
        typer.Argument(
            help="Module kind: common, kotlin, ndk-library, cmake-library, "
            "app-common, app"
        ),
    ],
    tasks: Annotated[
        list[str] | None,
        typer.Argument(help="Requested task names, in invocation order"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (yaml or json)"),
    ] = "yaml",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to file instead of stdout"),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Project root directory"),
    ] = None,
    module: Annotated[
        str | None,
        typer.Option("--module", "-m", help="Module name"),
    ] = None,
) -> None:
    """Produce the shared build configuration for a module."""
    from apkbuild.android.configure import configure_module
    from apkbuild.android.io import (
        config_to_json_string,
        config_to_yaml_string,
        export_config,
    )
    from apkbuild.android.signing import MissingSigningError
    from apkbuild.properties import MetadataError, PropertiesError
    from apkbuild.types import ModuleKind

    try:
        module_kind = ModuleKind(kind)
    except ValueError:
        valid = ", ".join(k.value for k in ModuleKind)
        console.print(f"[red]Invalid module kind: {kind}. Valid: {valid}[/red]")
        raise typer.Exit(code=1) from None

    if output_format not in ("yaml", "json"):
        console.print(f"[red]Invalid format: {output_format}. Use yaml or json[/red]")
        raise typer.Exit(code=1)

    settings = _settings_with(root=root)
    ctx = BuildContext.from_tasks(tasks)

    try:
        android = configure_module(module_kind, ctx, settings, module=module)
    except MissingSigningError as e:
        console.print(f"[red]Refusing to configure release build: {e}[/red]")
        raise typer.Exit(code=1) from None
    except (MetadataError, PropertiesError) as e:
        console.print(f"[red]Error ({e.code}): {e}[/red]")
        raise typer.Exit(code=1) from None
    except FileNotFoundError as e:
        console.print(f"[red]File not found: {e.filename}[/red]")
        raise typer.Exit(code=1) from None

    if output is not None:
        try:
            export_config(android, output)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1) from None
        console.print(f"[green]Wrote {module_kind.value} config to {output}[/green]")
    elif output_format == "json":
        _print_data(config_to_json_string(android))
    else:
        _print_data(config_to_yaml_string(android))


@app.command()
def checksum(
    files: Annotated[
        list[Path],
        typer.Argument(help="Output files to fingerprint"),
    ],
) -> None:
    """Write <name>.sha256sum.txt next to each file."""
    from apkbuild.outputs.checksums import write_checksum

    settings = get_settings()
    for file_path in files:
        if not file_path.is_file():
            console.print(f"[red]File not found: {file_path}[/red]")
            raise typer.Exit(code=1)
        result = write_checksum(file_path, ci_env_file=settings.ci_env_file)
        console.print(f"{result.sha256}  {file_path.name}")


@app.command()
def checksums(
    tasks: Annotated[
        list[str] | None,
        typer.Argument(help="Requested task names, in invocation order"),
    ] = None,
    apk_root: Annotated[
        Path | None,
        typer.Option("--apk-root", help="APK output root directory"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Fingerprint the outputs of the variant selected by the tasks."""
    from apkbuild.outputs.checksums import calculate_checksums, checksum_task_name

    settings = get_settings()
    ctx = BuildContext.from_tasks(tasks)
    root = apk_root or settings.effective_apk_root

    results = calculate_checksums(ctx, root, ci_env_file=settings.ci_env_file)

    if json_output:
        data = [
            {
                "output": str(r.output),
                "checksum_file": str(r.checksum_file),
                "sha256": r.sha256,
            }
            for r in results
        ]
        _print_data(json.dumps(data, indent=2))
        return

    if not results:
        console.print(
            f"[yellow]No outputs found for flavor '{ctx.flavor}' in {root}[/yellow]"
        )
        return

    console.print(f"[bold]{checksum_task_name(ctx)}:[/bold]")
    for r in results:
        console.print(f"  {r.sha256}  {r.output.name}")


@app.command()
def rename(
    file_name: Annotated[str, typer.Argument(help="Original output file name")],
    version_name: Annotated[
        str,
        typer.Option("--version-name", "-v", help="Variant version name"),
    ],
    app_module: Annotated[
        bool,
        typer.Option("--app/--common", help="Use the application display name"),
    ] = True,
    project: Annotated[
        str | None,
        typer.Option("--project", "-p", help="Module name"),
    ] = None,
) -> None:
    """Print the shipped name for a build output."""
    from apkbuild.outputs.naming import rename_app, rename_common

    settings = _settings_with(project=project)
    if app_module:
        renamed = rename_app(
            file_name, settings.project_name, settings.display_name, version_name
        )
    else:
        renamed = rename_common(file_name, settings.project_name, version_name)
    _print_data(renamed)


if __name__ == "__main__":
    app()

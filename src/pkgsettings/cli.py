#!/usr/bin/env python3
"""
Command-line interface for pkgsettings.

This module provides the ``source``, ``feature`` and ``apikey`` command groups
that read and change the package manager's settings document.
"""

import sys
import json
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from . import create_service
from .core.errors import PkgSettingsError
from .core.requests import Action, CommandType, SettingsRequest
from .core.settings import ApiKeyView, SourceView
from .utils.logger import setup_logging
from .utils.platform import CONFIG_FILE_ENV, KEY_FILE_ENV, platform_detector

# Rich console for formatted output
console = Console()


def format_source_table(sources: List[SourceView]) -> Table:
    """Format sources as a rich table."""
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Source", style="magenta")
    table.add_column("Status", style="yellow")
    table.add_column("Password", style="green")

    for source in sources:
        table.add_row(
            source.id,
            source.value,
            "[dim]disabled[/dim]" if source.disabled else "enabled",
            "none" if source.authenticated else "stored",
        )

    return table


def run_request(ctx, request: SettingsRequest, key_callback=None):
    """Execute a request against the service held in the click context."""
    request.noop = ctx.obj['noop']
    try:
        return ctx.obj['service'].execute(request, key_callback)
    except PkgSettingsError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)


# Main CLI group
@click.group()
@click.option('--config-file', type=click.Path(dir_okay=False, path_type=Path),
              envvar=CONFIG_FILE_ENV, help='Path to the settings document')
@click.option('--key-file', type=click.Path(dir_okay=False, path_type=Path),
              envvar=KEY_FILE_ENV, help='Path to the secret key file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(path_type=Path), help='Log file path')
@click.option('--plain', is_flag=True, help='Plain coloured log output instead of rich')
@click.option('--noop', is_flag=True, help='Report what would change without saving anything')
@click.pass_context
def cli(ctx, config_file: Optional[Path], key_file: Optional[Path], verbose: bool,
        log_file: Optional[Path], plain: bool, noop: bool):
    """pkgsettings - Manage package sources, features and API keys."""
    ctx.ensure_object(dict)

    setup_logging(
        level='DEBUG' if verbose else 'INFO',
        log_file=log_file,
        verbose=verbose,
        plain=plain
    )

    ctx.obj['config_file'] = config_file or platform_detector.default_settings_file()
    ctx.obj['key_file'] = key_file or platform_detector.default_key_file()
    ctx.obj['noop'] = noop
    ctx.obj['service'] = create_service(ctx.obj['config_file'], ctx.obj['key_file'])


# Info command
@cli.command()
@click.pass_context
def info(ctx):
    """Show where settings, keys and logs are stored."""
    system_info = platform_detector.get_system_info()
    console.print(Panel(
        f"[cyan]Settings file:[/cyan] {ctx.obj['config_file']}\n"
        f"[cyan]Key file:[/cyan] {ctx.obj['key_file']}\n"
        f"[cyan]Log directory:[/cyan] {system_info['log_directory']}",
        title="pkgsettings"
    ))
    console.print(f"\n[dim]Platform: {system_info['os_type']} | "
                  f"Python: {system_info['python_version']}[/dim]")


# Source commands group
@cli.group()
def source():
    """Manage package sources."""
    pass


@source.command('list')
@click.option('--limit-output', '-r', is_flag=True,
              help='Print pipe-separated rows only: id|value|disabled|authenticated')
@click.option('--format', 'output_format', type=click.Choice(['text', 'table', 'json']),
              default='text', help='Output format')
@click.pass_context
def source_list(ctx, limit_output: bool, output_format: str):
    """List configured sources."""
    regular_output = output_format == 'text' and not limit_output
    sources = run_request(ctx, SettingsRequest(
        CommandType.SOURCE, Action.LIST, regular_output=regular_output
    ))

    if limit_output:
        for s in sources:
            click.echo(f"{s.id}|{s.value}|{s.disabled}|{s.authenticated}")
    elif output_format == 'json':
        click.echo(json.dumps([s.to_dict() for s in sources], indent=2))
    elif output_format == 'table':
        if not sources:
            console.print("[dim]No sources configured.[/dim]")
            return
        console.print(format_source_table(sources))
        console.print(f"\n[dim]Total: {len(sources)} sources[/dim]")


@source.command('add')
@click.argument('name', type=str)
@click.argument('location', type=str)
@click.option('--user', '-u', 'username', type=str, help='User name for the source')
@click.option('--password', '-p', type=str, help='Password for the source')
@click.pass_context
def source_add(ctx, name: str, location: str, username: Optional[str], password: Optional[str]):
    """Add a source NAME pointing at LOCATION."""
    if run_request(ctx, SettingsRequest(
        CommandType.SOURCE, Action.ADD, name=name, source=location,
        username=username, password=password
    )):
        console.print(f"[green]✓ Added source '[cyan]{name}[/cyan]'[/green]")


@source.command('remove')
@click.argument('name', type=str)
@click.pass_context
def source_remove(ctx, name: str):
    """Remove a source."""
    if run_request(ctx, SettingsRequest(CommandType.SOURCE, Action.REMOVE, name=name)):
        console.print(f"[green]✓ Removed source '[cyan]{name}[/cyan]'[/green]")


@source.command('enable')
@click.argument('name', type=str)
@click.pass_context
def source_enable(ctx, name: str):
    """Enable a source."""
    if run_request(ctx, SettingsRequest(CommandType.SOURCE, Action.ENABLE, name=name)):
        console.print(f"[green]✓ Enabled source '[cyan]{name}[/cyan]'[/green]")


@source.command('disable')
@click.argument('name', type=str)
@click.pass_context
def source_disable(ctx, name: str):
    """Disable a source."""
    if run_request(ctx, SettingsRequest(CommandType.SOURCE, Action.DISABLE, name=name)):
        console.print(f"[green]✓ Disabled source '[cyan]{name}[/cyan]'[/green]")


# Feature commands group
@cli.group()
def feature():
    """Manage feature flags."""
    pass


@feature.command('list')
@click.pass_context
def feature_list(ctx):
    """List features and whether they are enabled."""
    run_request(ctx, SettingsRequest(CommandType.FEATURE, Action.LIST))


@feature.command('enable')
@click.argument('name', type=str)
@click.pass_context
def feature_enable(ctx, name: str):
    """Explicitly enable a feature."""
    if run_request(ctx, SettingsRequest(CommandType.FEATURE, Action.ENABLE, name=name)):
        console.print(f"[green]✓ Enabled feature '[cyan]{name}[/cyan]'[/green]")


@feature.command('disable')
@click.argument('name', type=str)
@click.pass_context
def feature_disable(ctx, name: str):
    """Explicitly disable a feature."""
    if run_request(ctx, SettingsRequest(CommandType.FEATURE, Action.DISABLE, name=name)):
        console.print(f"[green]✓ Disabled feature '[cyan]{name}[/cyan]'[/green]")


# API key commands group
@cli.group()
def apikey():
    """Manage API keys."""
    pass


@apikey.command('get')
@click.option('--source', '-s', type=str, help='Only show the key for this source')
@click.pass_context
def apikey_get(ctx, source: Optional[str]):
    """Show stored API keys."""
    found = []

    def show_key(view: ApiKeyView):
        found.append(view)
        click.echo(f"{view.source} - {view.key}")

    run_request(ctx, SettingsRequest(CommandType.APIKEY, Action.GET, source=source), show_key)

    if not found:
        console.print("[dim]No API keys found.[/dim]")


@apikey.command('set')
@click.option('--source', '-s', type=str, required=True, help='Source the key belongs to')
@click.option('--key', '-k', type=str, required=True, help='The API key')
@click.pass_context
def apikey_set(ctx, source: str, key: str):
    """Store the API key for a source."""
    if run_request(ctx, SettingsRequest(CommandType.APIKEY, Action.SET, source=source, key=key)):
        console.print(f"[green]✓ Saved API key for '[cyan]{source}[/cyan]'[/green]")


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)


if __name__ == '__main__':
    main()

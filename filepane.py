#!/usr/bin/env python3
"""
Filepane - file-manager backend

Command-line entry point. Runs the same operations the GUI uses, serves the
JSON command bridge over stdin/stdout, and shows the audit log.
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core import AuditLogger, FileServiceError, ServiceConfig, load_config
from modules.file_service import CommandBridge, FileService
from modules.file_service.formatting import format_date, format_file_size, get_file_icon


console = Console()
err_console = Console(stderr=True)


def get_service(config: ServiceConfig) -> FileService:
    """Get a file service wired to the configured audit log."""
    logger = AuditLogger(log_path=config.audit_log_path) if config.audit_enabled else None
    return FileService(logger=logger, config=config)


def run_operation(operation, *args, **kwargs):
    """Run a service call, turning failures into a red message and exit status 1."""
    try:
        return operation(*args, **kwargs)
    except FileServiceError as e:
        err_console.print(f"[red]Error ({e.kind.name}):[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="Filepane")
@click.option("--config", "config_path", default="config.yaml", show_default=True,
              help="Path to the YAML configuration file.")
@click.pass_context
def filepane(ctx, config_path: str):
    """
    Filepane - backend for a desktop file manager

    List, create, delete, copy, move and rename files from the command line
    or through the JSON command bridge.
    """
    ctx.obj = load_config(config_path)


@filepane.command("ls")
@click.argument("path", default=".")
@click.pass_obj
def ls(config: ServiceConfig, path: str):
    """List a directory: folders first, then files."""
    listing = run_operation(get_service(config).list_directory, path)

    if not listing.files:
        console.print(f"[dim]{listing.path} is empty.[/dim]")
        return

    table = Table(title=escape(listing.path))
    table.add_column("")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="dim")

    for entry in listing:
        name = f"[bold blue]{escape(entry.name)}[/bold blue]" if entry.is_dir else escape(entry.name)
        size = "—" if entry.is_dir else format_file_size(entry.size)
        table.add_row(get_file_icon(entry.name, entry.is_dir), name, size, format_date(entry.modified))

    console.print(table)


@filepane.command("mkdir")
@click.argument("path")
@click.pass_obj
def mkdir(config: ServiceConfig, path: str):
    """Create a directory, including missing parents."""
    run_operation(get_service(config).create_directory, path)
    console.print(f"[green]Created:[/green] {path}")


@filepane.command("rm")
@click.argument("path")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.option("--collect-errors", is_flag=True,
              help="Keep deleting after failures and report them all.")
@click.pass_obj
def rm(config: ServiceConfig, path: str, yes: bool, collect_errors: bool):
    """Permanently delete a file or a directory tree."""
    if not yes:
        click.confirm(f"Permanently delete {path}?", abort=True)
    run_operation(get_service(config).delete, path, collect_errors=collect_errors or None)
    console.print(f"[green]Deleted:[/green] {path}")


@filepane.command("cp")
@click.argument("source")
@click.argument("dest")
@click.pass_obj
def cp(config: ServiceConfig, source: str, dest: str):
    """Copy a single file, overwriting DEST."""
    run_operation(get_service(config).copy, source, dest)
    console.print(f"[green]Copied:[/green] {source} → {dest}")


@filepane.command("mv")
@click.argument("source")
@click.argument("dest")
@click.pass_obj
def mv(config: ServiceConfig, source: str, dest: str):
    """Move a file or directory."""
    run_operation(get_service(config).move, source, dest)
    console.print(f"[green]Moved:[/green] {source} → {dest}")


@filepane.command("rename")
@click.argument("path")
@click.argument("new_name")
@click.pass_obj
def rename(config: ServiceConfig, path: str, new_name: str):
    """Rename a file or directory in place."""
    run_operation(get_service(config).rename, path, new_name)
    console.print(f"[green]Renamed:[/green] {path} → {new_name}")


@filepane.command()
@click.argument("command")
@click.option("--args", "args_json", default="{}", help="Command arguments as a JSON object.")
@click.pass_obj
def invoke(config: ServiceConfig, command: str, args_json: str):
    """Run one bridge command and print the JSON response."""
    try:
        args = json.loads(args_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--args")

    response = CommandBridge(get_service(config)).invoke(command, args)
    click.echo(json.dumps(response.to_dict(), ensure_ascii=False))
    if not response.ok:
        sys.exit(1)


@filepane.command()
@click.pass_obj
def serve(config: ServiceConfig):
    """Answer JSON requests from stdin, one response line per request."""
    bridge = CommandBridge(get_service(config))
    stdin = click.get_text_stream("stdin")

    for line in stdin:
        line = line.strip()
        if not line:
            continue
        click.echo(bridge.handle_line(line))


@filepane.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.option("--failed", is_flag=True, help="Only show failed operations.")
@click.pass_obj
def audit(config: ServiceConfig, limit: int, failed: bool):
    """View the audit log."""
    if not config.audit_enabled and not Path(config.audit_log_path).exists():
        console.print("[dim]Audit logging is disabled.[/dim]")
        return

    logger = AuditLogger(log_path=config.audit_log_path)
    entries = logger.get_failed_actions(limit=limit) if failed else logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Action")
    table.add_column("Description")
    table.add_column("Status")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        status_str = entry.status
        if entry.status == "executed":
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == "failed":
            status_str = f"[red]{entry.status}[/red]"

        description = entry.action_description
        if len(description) > 50:
            description = description[:50] + "..."

        table.add_row(time_str, entry.action_type, description, status_str)

    console.print(table)


@filepane.command("config")
@click.option("--save", is_flag=True, help="Write the effective settings to the config file.")
@click.pass_obj
def show_config(config: ServiceConfig, save: bool):
    """Show the effective configuration."""
    console.print(f"\n[bold]Config file:[/bold] {config.config_path}")
    console.print(f"  Audit log: {'enabled' if config.audit_enabled else 'disabled'}")
    console.print(f"  Audit log path: {config.audit_log_path}")
    console.print(f"  Collect delete errors: {config.delete_collect_errors}")

    if save:
        path = config.save()
        console.print(f"[green]Saved:[/green] {path}")


if __name__ == "__main__":
    filepane()

from pathlib import Path

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from qmodel.model import Direction, read_snapshot
from qmodel.models import MODELS, get_model_class
from qmodel.registry import create_user_registry_file, get_model_registry
from qmodel.types import ControlKind, QModelError
from qmodel.util import (
    DEFAULT_LOGLEVEL,
    REGISTRY_FILENAME,
    defaults,
    format_error_response,
    shutdown_log,
    start_log,
)


def print_tree(cmd, prefix="", parent_ctx=None):
    """Print command tree starting from given command."""
    ctx = click.Context(cmd, info_name=cmd.name, parent=parent_ctx)

    # Only print root name if no parent
    if not parent_ctx:
        click.echo(cmd.name)

    for sub in sorted(cmd.list_commands(ctx)):
        sub_cmd = cmd.get_command(ctx, sub)
        click.echo(f"{prefix}└── {sub}")
        if isinstance(sub_cmd, click.Group):
            print_tree(sub_cmd, prefix + "    ", ctx)


def tree_option(f):
    """Add --tree option to command."""

    def callback(ctx, param, value):
        if not value or ctx.resilient_parsing:
            return
        print_tree(ctx.command)
        ctx.exit()

    return click.option(
        "--tree",
        is_flag=True,
        help="Show command tree from this point",
        expose_value=False,
        is_eager=True,
        callback=callback,
    )(f)


def _fail(ctx: click.Context, err: Exception):
    logger.error(f"{ctx.info_name} failed: {format_error_response()}")
    click.echo(f"Error: {err}", err=True)
    ctx.exit(1)


@click.group()
@tree_option
@click.option(
    "--log-to-file/--no-log-to-file",
    "-ltf/",
    default=False,
    help="Enable/disable logging to file (default: disabled)",
)
@click.option(
    "--log-to-stdout/--no-log-to-stdout",
    default=False,
    help="Log to stderr while running",
)
@click.option(
    "--log-path",
    "-lp",
    default="",
    help="Custom path for log file (default: ~/.qmodel/qmodel.log)",
)
@click.option(
    "--clear-prev-log/--no-clear-prev-log",
    "-c/",
    default=True,
    help="Clear previous log file on startup (default: enabled)",
)
@click.option(
    "--log-level",
    "-ll",
    default=DEFAULT_LOGLEVEL,
    help="Logging level (default: INFO)",
)
@click.pass_context
def cli(ctx, log_to_file, log_to_stdout, log_path, clear_prev_log, log_level):
    """qmodel - model configuration for quantitative imaging.

    - Inspect saved model snapshots

    - Convert protocols between original and user units

    - Show control states of a model
    """
    start_log(
        log_to_file=log_to_file,
        log_to_stdout=log_to_stdout,
        log_path=log_path,
        clear_prev=log_to_file and clear_prev_log,
        log_level=log_level,
    )
    ctx.call_on_close(shutdown_log)


@cli.command()
def models():
    """List available models and their protocol units."""
    registry = get_model_registry()
    click.echo("\nAvailable models:")
    click.echo("-----------------")
    for name in MODELS:
        click.echo(f"\n{name}")
        units = registry.get(name)
        for prot_name, labels in units.protocols.items():
            for label, mapping in labels.items():
                click.echo(
                    f"  {prot_name}.{label}: {mapping.symbol} "
                    f"(scale factor {mapping.scale_factor:g})"
                )
    click.echo("")


@cli.command()
@click.argument("model_name")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def save(ctx, model_name: str, path: str):
    """Save a model with default settings to a snapshot file.

    MODEL_NAME: Name of the model (case-insensitive)
    PATH: Output file, the .qmodel.msgpack suffix is added if missing
    """
    try:
        model = get_model_class(model_name)()
        written = model.save_obj(path)
    except (QModelError, ValueError) as e:
        _fail(ctx, e)
    click.echo(f"Saved {model.model_name} to {written}")


@cli.command()
@click.argument("snapshot_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def inspect(ctx, snapshot_file: str):
    """Print the contents of a snapshot file."""
    try:
        snapshot = read_snapshot(snapshot_file)
    except QModelError as e:
        _fail(ctx, e)
    click.echo(f"\nSnapshot: {snapshot_file}")
    click.echo(f"Version: {snapshot.version}")
    click.echo(f"Model: {snapshot.properties.get('model_name', '<unknown>')}")
    click.echo("Properties:")
    for name in snapshot.keys():
        click.echo(f"  - {name}")
    click.echo("")


@cli.command()
@click.argument("model_name")
@click.option("--check", "-c", multiple=True, help="Checkbox to check first")
@click.option("--uncheck", "-u", multiple=True, help="Checkbox to uncheck first")
@click.pass_context
def controls(ctx, model_name: str, check: tuple[str, ...], uncheck: tuple[str, ...]):
    """Show control states of a model after applying its dependency rules."""
    try:
        model = get_model_class(model_name)()
        for name in check:
            model.set_option(name, True)
        for name in uncheck:
            model.set_option(name, False)
        model.update_fields()
    except (QModelError, ValueError) as e:
        _fail(ctx, e)

    table = Table(title=f"{model.model_name} controls")
    table.add_column("Control")
    table.add_column("Kind")
    table.add_column("Value")
    table.add_column("Visible")
    table.add_column("Enabled")
    for entry in model.controls:
        if entry.kind is ControlKind.PANEL:
            state = "hidden" if entry.hidden else "shown"
            table.add_row(f"[bold]{entry.name}[/bold]", "panel", "", state, "")
            continue
        table.add_row(
            entry.name,
            entry.kind.value,
            str(entry.selection if entry.kind is ControlKind.CHOICE else entry.value),
            "yes" if model.controls.is_visible(entry.name) else "no",
            "yes" if model.controls.is_enabled(entry.name) else "no",
        )
    Console(color_system=None, width=120).print(table)


@cli.command()
@click.argument("model_name")
@click.option(
    "--to",
    "direction",
    type=click.Choice([d.value for d in Direction]),
    default=Direction.USER.value,
    help="Unit system to convert the default protocols to",
)
@click.pass_context
def convert(ctx, model_name: str, direction: str):
    """Print a model's default protocols in user or original units."""
    try:
        model = get_model_class(model_name)()
        prot, _ = model.get_scaled_protocols(direction)
    except (QModelError, ValueError) as e:
        _fail(ctx, e)
    click.echo(f"\n{model.model_name} protocols ({direction} units):")
    for prot_name, prot_field in prot.items():
        click.echo(f"\n{prot_name}: {', '.join(prot_field.format)}")
        for row in prot_field.mat:
            click.echo("  " + "  ".join(f"{v:g}" for v in row))
    click.echo("")


@cli.group()
@tree_option
def registry():
    """Manage unit registry configuration."""
    pass


@registry.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Destination (default: ~/.qmodel/model_registry.json)",
)
def install(path):
    """Install the default unit registry to the user directory for editing."""
    dest = Path(path) if path else Path(defaults.CONFIG_DIR) / REGISTRY_FILENAME
    create_user_registry_file(dest)
    click.echo(f"Installed unit registry to {dest}")

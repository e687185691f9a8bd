"""CLI interface for paramguard using Typer framework."""

import importlib
import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from paramguard import __description__, __version__
from paramguard.config import GuardConfig, LogLevel, build_interceptor, load_config
from paramguard.interceptor import Reject
from paramguard.messages import ValidationFault
from paramguard.validation.framework import registered_validator_types

app = typer.Typer(
    name="paramguard",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_log_level_override: LogLevel | None = None

VALID_FORMATS = ["table", "json"]


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"paramguard version {__version__}")
        raise typer.Exit()


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.to_logging(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(level.to_logging())


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", "-l", help="Logging level (overrides configuration)")
    ] = None,
) -> None:
    """paramguard - Input validation for service operation calls."""
    global _log_level_override
    _log_level_override = log_level
    if log_level is not None:
        _configure_logging(log_level)


def _load(config: Path | None) -> GuardConfig:
    guard_config = load_config(config)
    if _log_level_override is None:
        _configure_logging(guard_config.logging.level)
    return guard_config


def _check_format(format: str) -> None:
    if format not in VALID_FORMATS:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(VALID_FORMATS)}")
        raise typer.Exit(1)


def _import_model(reference: str) -> type:
    """Resolve a ``module:Class`` reference to a pydantic model class."""
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Model reference must look like 'module:Class', got '{reference}'")

    module = importlib.import_module(module_name)
    model = getattr(module, attr, None)
    if model is None or not hasattr(model, "model_construct"):
        raise ValueError(f"'{reference}' is not a pydantic model")
    return model


def _load_inputs(payload: Path, model: type | None) -> list[Any]:
    with open(payload, encoding="utf-8") as f:
        data = jsonlib.load(f)

    inputs = data if isinstance(data, list) else [data]
    if model is None:
        return inputs

    # model_construct skips validation so the interceptor sees the raw values
    return [model.model_construct(**item) if isinstance(item, dict) else item for item in inputs]


def _print_fault(fault: ValidationFault) -> None:
    console.print(f"[red]Operation '{fault.operation}' rejected[/red]")
    console.print(f"Failures: {len(fault.failures)}")

    table = Table()
    table.add_column("#", style="dim", justify="right")
    table.add_column("Member", style="cyan")
    table.add_column("Message", style="white")
    table.add_column("Rule", style="dim")

    for index, failure in enumerate(fault.failures, 1):
        table.add_row(str(index), failure.member or "-", failure.message, failure.rule or "")

    console.print(table)


@app.command("validators")
def list_validators() -> None:
    """List registered validators."""
    table = Table(title="Registered validators")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="white")

    for name, factory in registered_validator_types().items():
        doc = (factory.__doc__ or "").strip().split("\n")[0]
        table.add_row(name, doc)

    console.print(table)


@app.command("config")
def show_config(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .paramguard.json)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """Show the effective configuration."""
    _check_format(format)

    try:
        guard_config = _load(config)
        build_interceptor(guard_config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if format == "json":
        typer.echo(jsonlib.dumps(guard_config.model_dump(mode="json"), indent=2))
        return

    table = Table(title="paramguard configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("validators", ", ".join(guard_config.validators))
    table.add_row("messages.header", guard_config.messages.header)
    table.add_row("logging.level", guard_config.logging.level.value)
    console.print(table)


@app.command()
def check(
    payload: Annotated[
        Path,
        typer.Argument(help="JSON file holding the call inputs (a list, or a single object)")
    ],
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Pydantic model for object inputs, as module:Class")
    ] = None,
    operation: Annotated[
        str,
        typer.Option("--operation", "-o", help="Operation name reported in the fault")
    ] = "check",
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .paramguard.json)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """Run call inputs through the configured validators."""
    _check_format(format)

    try:
        interceptor = build_interceptor(_load(config))
        model_cls = _import_model(model) if model else None
        inputs = _load_inputs(payload, model_cls)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (ValueError, ImportError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    decision = interceptor.evaluate(operation, inputs)

    if isinstance(decision, Reject):
        if format == "json":
            typer.echo(jsonlib.dumps({"ok": False, "fault": decision.fault.to_dict()}, indent=2))
        else:
            _print_fault(decision.fault)
        raise typer.Exit(1)

    if format == "json":
        typer.echo(jsonlib.dumps({"ok": True, "fault": None}, indent=2))
    else:
        console.print(f"[green]Operation '{operation}' passed validation ({len(inputs)} input(s))[/green]")

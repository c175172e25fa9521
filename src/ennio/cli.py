"""
CLI module - Command line interface for Ennio

Entry point for the `ennio` command using Typer.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import Config, LoadingError, load_config
from .output import Output, Status
from .runners import RunnerCallbacks, RunnerResult, SequentialRunner

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name="ennio",
    help="Ennio - run a workflow of actions sequentially, sharing their outputs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

STATUS_STYLES = {
    Status.UNCHANGED: "dim",
    Status.CHANGED: "green",
    Status.FAILED: "red",
    Status.SKIPPED: "yellow",
}


def version_callback(value: bool):
    if value:
        console.print(f"ennio version {__version__}")
        raise typer.Exit()


# Type aliases for common options
ConfigArgument = Annotated[
    Path | None,
    typer.Argument(help="Workflow file (default: $ENNIO_CONFIG, ./ennio.yml, ./ennio.yaml)", dir_okay=False),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-V", help="Enable debug logging")]


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version")
    ] = False,
):
    """Ennio - run a workflow of actions sequentially, sharing their outputs."""
    pass


def setup_logging(level: str | int = logging.INFO) -> None:
    """Send library logs to stderr through Rich."""
    handler = RichHandler(console=err_console, show_path=False)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)


def get_config(config_path: Path | None) -> Config:
    """Load configuration, exiting with a readable error on failure."""
    try:
        return load_config(config_path)
    except LoadingError as e:
        err_console.print(f"[red]Error:[/red] Unable to load configuration: {e}")
        raise typer.Exit(1) from None


def format_status(status: Status) -> str:
    style = STATUS_STYLES[status]
    return f"[{style}]{status}[/{style}]"


def format_vars(output: Output, width: int = 60) -> str:
    """One line per variable, long values truncated."""
    lines = []
    for name, value in output.vars.items():
        text = value.to_text().strip().replace("\n", "\\n")
        if len(text) > width:
            text = text[: width - 1] + "…"
        lines.append(f"{name}={text}")
    return "\n".join(lines)


def print_results(result: RunnerResult) -> None:
    table = Table(title=f"Workflow: {result.workflow_name}")
    table.add_column("Action", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Vars", style="dim", no_wrap=False)

    for name, output in result.outputs.items():
        table.add_row(name, format_status(output.status), format_vars(output))

    console.print(table)

    counts = ", ".join(f"{result.count(status)} {status}" for status in Status)
    console.print(f"\n[bold]Summary:[/bold] {len(result.outputs)} actions ({counts})")
    if result.failed:
        console.print(f"[red]✗ Failed:[/red] {', '.join(result.failed)}")
    else:
        console.print("[green]✓ All actions succeeded[/green]")


@app.command()
def run(
    config: ConfigArgument = None,
    verbose: VerboseOption = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print outputs as JSON instead of a table")] = False,
):
    """
    Run a workflow file.

    Every action runs in declared order, even after a failure.
    Exits with code 1 if any action failed.

    [bold]Examples:[/bold]

        ennio run deploy.yml

        ennio run --json > outputs.json
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    cfg = get_config(config)
    if not verbose:
        logging.getLogger().setLevel(cfg.logging.level)

    workflow = cfg.build_workflow()

    def on_action_start(name: str, index: int, total: int):
        if not as_json:
            console.print(f"  [{index}/{total}] {name}...")

    def on_action_complete(name: str, output: Output):
        if not as_json:
            console.print(f"  {format_status(output.status)} {name}")

    callbacks = RunnerCallbacks(on_action_start=on_action_start, on_action_complete=on_action_complete)

    if not as_json:
        console.print(f"\n[bold]Running:[/bold] {workflow.name} ({len(workflow)} actions)\n")

    result = SequentialRunner().run(workflow, callbacks)

    if as_json:
        data = {name: output.to_dict() for name, output in result.outputs.items()}
        console.print_json(json.dumps(data))
    else:
        console.print()
        print_results(result)

    if not result.success:
        raise typer.Exit(1)


@app.command()
def validate(
    config: ConfigArgument = None,
    verbose: VerboseOption = False,
):
    """
    Validate a workflow file without running it.

    [bold]Examples:[/bold]

        ennio validate deploy.yml
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    cfg = get_config(config)

    table = Table(title=f"Workflow: {cfg.name}")
    table.add_column("#", justify="right")
    table.add_column("Action", style="cyan")
    table.add_column("Type")
    table.add_column("Script", style="dim", no_wrap=False)

    for index, action in enumerate(cfg.actions, start=1):
        table.add_row(str(index), action.name, action.type, action.script.strip())

    console.print(table)
    console.print(f"[green]✓ {cfg.path} is valid[/green]")


if __name__ == "__main__":
    app()

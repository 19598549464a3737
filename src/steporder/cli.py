"""Command-line interface for steporder."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .exceptions import StepOrderError
from .graph import DependencyGraph
from .logger import setup_logger
from .parser import InstructionParser
from .scheduler import (
    AlgorithmType,
    SchedulingConfig,
    SchedulingResult,
    SchedulingService,
)
from .unified_config import discover_config, set_config_path

app = typer.Typer(
    name="steporder",
    help="Order dependent steps and simulate a pool of workers executing them",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to unified config file (default: steporder_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for steporder commands."""
    setup_logger(verbose)
    set_config_path(config)


@app.command()
def order(
    file: Annotated[Path, typer.Argument(help="Path to the step instructions file")] = Path(
        "input.txt"
    ),
) -> None:
    """Print the order in which a single worker completes the steps."""
    config = _load_scheduling_config(file)
    config = config.model_copy(
        update={"algorithm": config.algorithm.model_copy(update={"type": AlgorithmType.SERIAL})}
    )
    result = _run(file, config)
    typer.echo(result.order)


@app.command()
def simulate(
    file: Annotated[Path, typer.Argument(help="Path to the step instructions file")] = Path(
        "input.txt"
    ),
    *,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", help="Number of workers (overrides config)", min=1),
    ] = None,
    overhead: Annotated[
        int | None,
        typer.Option("--overhead", help="Fixed time added to every step (overrides config)", min=0),
    ] = None,
    timeline: Annotated[
        bool,
        typer.Option("--timeline", help="Also print when each step ran and on which worker"),
    ] = False,
) -> None:
    """Simulate a pool of workers and print the total time and completion order."""
    config = _load_scheduling_config(file)

    worker_updates: dict[str, int] = {}
    if workers is not None:
        worker_updates["worker_count"] = workers
    if overhead is not None:
        worker_updates["fixed_overhead"] = overhead

    config = config.model_copy(
        update={
            "algorithm": config.algorithm.model_copy(update={"type": AlgorithmType.WORKER_POOL}),
            "workers": config.workers.model_copy(update=worker_updates),
        }
    )
    result = _run(file, config)

    typer.echo(f"Total time: {result.total_time}")
    typer.echo(f"Order: {result.order}")
    if timeline:
        for step in result.timeline:
            typer.echo(
                f"  {step.task_id}: worker {step.worker}, {step.start_time} -> {step.end_time}"
            )


@app.command()
def graph(
    file: Annotated[Path, typer.Argument(help="Path to the step instructions file")] = Path(
        "input.txt"
    ),
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Generate the dependency graph in DOT format."""
    try:
        edges = InstructionParser().parse_file(file)
    except StepOrderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    dot_output = DependencyGraph.build(edges).to_dot()

    if output:
        output.write_text(dot_output + "\n", encoding="utf-8")
        typer.echo(f"Graph written to {output}")
    else:
        typer.echo(dot_output)


def _load_scheduling_config(file: Path) -> SchedulingConfig:
    """Load the scheduler section from the discovered config, or defaults."""
    try:
        unified_config = discover_config(file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if unified_config is None:
        return SchedulingConfig()
    return unified_config.scheduler


def _run(file: Path, config: SchedulingConfig) -> SchedulingResult:
    """Parse the instructions and run the scheduler, exiting with 1 on failure."""
    try:
        edges = InstructionParser().parse_file(file)
        return SchedulingService(edges, config).schedule()
    except StepOrderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()

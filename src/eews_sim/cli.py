"""CLI interface using Typer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from eews_sim import __version__
from eews_sim.buildings import load_buildings
from eews_sim.config import ReportFormat, SimulationConfig
from eews_sim.errors import SimulationError
from eews_sim.exporters import export_csv, export_json
from eews_sim.feed import read_feed
from eews_sim.models import Building, RiskAssessment, SimulationReport
from eews_sim.presentation import SceneNarrator, building_response
from eews_sim.simulator import run_simulation, watch
from eews_sim.structural import evaluate_all
from eews_sim.timeline import Listener

Exporter = Callable[[SimulationReport, Path], Path]

EXPORTERS: dict[str, Exporter] = {
    "json": export_json,
    "csv": export_csv,
}

app = typer.Typer(
    name="eews-sim",
    help="Earthquake early-warning scene simulation.",
    add_completion=False,
)
console = Console()

_RISK_STYLE = {"High": "[red]High[/red]", "Medium": "[yellow]Medium[/yellow]"}

BuildingsOption = Annotated[
    Path,
    typer.Option("--buildings", "-b", help="Building definitions (CSV or JSON)."),
]
FeedOption = Annotated[
    Path,
    typer.Option("--feed", help="Earthquake feed JSON file."),
]
LogOption = Annotated[
    Path,
    typer.Option("--log", help="Event log file (appended)."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging."),
]
RealtimeOption = Annotated[
    bool,
    typer.Option("--realtime/--simulated", help="Wait in real time between phases."),
]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"eews-sim {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )


def _load_or_exit(path: Path) -> list[Building]:
    try:
        return load_buildings(path)
    except SimulationError as exc:
        console.print(f"[red]Could not load buildings:[/red] {exc}")
        raise typer.Exit(code=1) from None


def _scene_listeners(verbose: bool, buildings: list[Building]) -> list[Listener]:
    """Print scene updates as phases arrive when running verbosely."""
    if not verbose:
        return []
    floors = {b.identifier: b.floors for b in buildings}
    return [SceneNarrator(lambda line: console.print(f"[dim]{line}[/dim]"), floors)]


def _assessment_table(
    title: str,
    assessments: list[RiskAssessment],
    floors: dict[str, int],
) -> Table:
    table = Table(title=title)
    table.add_column("Building", style="bold")
    table.add_column("Displacement (m)", justify="right")
    table.add_column("Risk")
    table.add_column("Tilt (deg)", justify="right", style="dim")

    for a in assessments:
        response = building_response(a, floors.get(a.building_identifier, 0))
        table.add_row(
            a.building_identifier,
            f"{a.displacement:.3f}",
            _RISK_STYLE.get(a.risk_level.value, f"[green]{a.risk_level.value}[/green]"),
            f"{response.tilt_degrees:g}",
        )
    return table


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """EEWS Sim: earthquake timeline and structural risk simulation."""


@app.command()
def run(
    buildings_file: BuildingsOption,
    feed: FeedOption = Path("earthquake_data.json"),
    log: LogOption = Path("earthquake_log.txt"),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Report output path."),
    ] = None,
    output_format: Annotated[
        ReportFormat,
        typer.Option("--format", "-f", help="Report format: json or csv."),
    ] = "json",
    realtime: RealtimeOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Simulate the earthquake currently in the feed file once."""
    _setup_logging(verbose)

    try:
        config = SimulationConfig(
            feed_path=feed,
            log_path=log,
            realtime=realtime,
            report_file=output,
            report_format=output_format,
        )
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from None

    buildings = _load_or_exit(buildings_file)

    try:
        event = read_feed(config.feed_path)
        if event is None:
            console.print(f"[yellow]No earthquake feed at {config.feed_path}.[/yellow]")
            raise typer.Exit()
        report = run_simulation(
            event, buildings, config, listeners=_scene_listeners(verbose, buildings)
        )
    except SimulationError as exc:
        console.print(f"[red]Simulation failed:[/red] {exc}")
        raise typer.Exit(code=1) from None

    floors = {b.identifier: b.floors for b in buildings}
    console.print()
    console.print(
        _assessment_table(
            f"Structural Response (M{event.magnitude:g})", report.post, floors
        )
    )

    if config.report_file is not None:
        EXPORTERS[config.report_format](report, config.report_file)
        console.print(
            f"\n{config.report_format.upper()} written to [bold]{config.report_file}[/bold]"
        )
    console.print(f"Log appended to [bold]{config.log_path}[/bold]")
    console.print(f"High-risk buildings: {len(report.high_risk_buildings)}")


@app.command("watch")
def watch_command(
    buildings_file: BuildingsOption,
    feed: FeedOption = Path("earthquake_data.json"),
    log: LogOption = Path("earthquake_log.txt"),
    interval: Annotated[
        float,
        typer.Option("--interval", help="Seconds between feed polls."),
    ] = 5.0,
    max_runs: Annotated[
        int | None,
        typer.Option("--max-runs", help="Stop after this many simulations."),
    ] = None,
    realtime: RealtimeOption = True,
    verbose: VerboseOption = False,
) -> None:
    """Poll the feed file and simulate every earthquake it reports."""
    _setup_logging(verbose)

    try:
        config = SimulationConfig(
            feed_path=feed, log_path=log, poll_interval=interval, realtime=realtime
        )
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from None

    buildings = _load_or_exit(buildings_file)
    console.print(f"Watching [bold]{config.feed_path}[/bold] every {config.poll_interval:g}s")

    try:
        reports = watch(
            config,
            buildings,
            listeners=_scene_listeners(verbose, buildings),
            max_runs=max_runs,
        )
    except SimulationError as exc:
        console.print(f"[red]Watch failed:[/red] {exc}")
        raise typer.Exit(code=1) from None
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped.[/yellow]")
        raise typer.Exit() from None

    console.print(f"Simulations run: {len(reports)}")


@app.command()
def evaluate(
    buildings_file: BuildingsOption,
    magnitude: Annotated[
        float,
        typer.Option("--magnitude", "-m", help="Earthquake magnitude."),
    ],
    verbose: VerboseOption = False,
) -> None:
    """Evaluate structural risk for each building at a given magnitude."""
    _setup_logging(verbose)
    buildings = _load_or_exit(buildings_file)

    try:
        config = SimulationConfig()
        assessments = evaluate_all(buildings, magnitude, config.thresholds)
    except (SimulationError, ValidationError) as exc:
        console.print(f"[red]Evaluation failed:[/red] {exc}")
        raise typer.Exit(code=1) from None

    floors = {b.identifier: b.floors for b in buildings}
    console.print(
        _assessment_table(f"Structural Risk (M{magnitude:g})", assessments, floors)
    )

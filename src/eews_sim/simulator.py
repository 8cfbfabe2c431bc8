"""Simulation orchestrator: poll feed -> run timeline -> log -> report."""

from __future__ import annotations

import logging
from collections.abc import Callable

from eews_sim.clock import Clock, SystemClock, VirtualClock
from eews_sim.config import SimulationConfig
from eews_sim.errors import FeedError, InvalidEvent
from eews_sim.eventlog import EventLog
from eews_sim.feed import read_feed
from eews_sim.models import (
    Building,
    EarthquakeEvent,
    Phase,
    PhaseEvent,
    SimulationReport,
)
from eews_sim.structural import validate_building
from eews_sim.timeline import Listener, TimelineDriver, TimelineRun

logger = logging.getLogger(__name__)


def make_clock(config: SimulationConfig) -> Clock:
    """Real-time clock when configured, otherwise simulated time."""
    return SystemClock() if config.realtime else VirtualClock()


def build_report(run: TimelineRun) -> SimulationReport:
    report = SimulationReport(event=run.event, cancelled=run.cancelled)
    for phase_event in run.emitted:
        report.phases.append(phase_event)
        if phase_event.phase is Phase.PREDICTIVE_ANALYSIS:
            report.predictive = list(phase_event.assessments)
        elif phase_event.phase is Phase.POST_ANALYSIS:
            report.post = list(phase_event.assessments)
    return report


def run_simulation(
    event: EarthquakeEvent,
    buildings: list[Building],
    config: SimulationConfig,
    clock: Clock | None = None,
    listeners: list[Listener] | None = None,
    should_cancel: Callable[[PhaseEvent], bool] | None = None,
) -> SimulationReport:
    """Run one earthquake end-to-end with the event log attached.

    *should_cancel* is consulted after every phase; returning True stops
    the run at that boundary.
    """
    driver = TimelineDriver(
        clock=clock if clock is not None else make_clock(config),
        settings=config.timeline_settings(),
        thresholds=config.thresholds,
    )
    driver.subscribe(EventLog(config.log_path))
    for listener in listeners or []:
        driver.subscribe(listener)

    run = driver.start(event, buildings)
    for phase_event in run:
        if should_cancel is not None and should_cancel(phase_event):
            run.cancel()

    report = build_report(run)
    logger.info(
        "Simulation finished: M%.1f, %d/%d phases, high-risk buildings: %s",
        event.magnitude,
        len(report.phases),
        len(Phase),
        report.high_risk_buildings or "none",
    )
    return report


def watch(
    config: SimulationConfig,
    buildings: list[Building],
    clock: Clock | None = None,
    listeners: list[Listener] | None = None,
    max_runs: int | None = None,
    max_polls: int | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> list[SimulationReport]:
    """Poll the feed file and simulate each earthquake found.

    Only one simulation is outstanding at a time; polling resumes
    ``poll_interval`` seconds after a run completes. Unreadable feeds and
    out-of-range events are logged and skipped.
    """
    for building in buildings:
        validate_building(building)
    if clock is None:
        clock = make_clock(config)

    reports: list[SimulationReport] = []
    polls = 0
    while True:
        if should_stop is not None and should_stop():
            break
        if max_polls is not None and polls >= max_polls:
            break
        polls += 1

        try:
            event = read_feed(config.feed_path)
        except FeedError as exc:
            logger.warning("Skipping feed: %s", exc)
            event = None

        if event is not None:
            try:
                reports.append(
                    run_simulation(event, buildings, config, clock, listeners)
                )
            except InvalidEvent as exc:
                logger.warning("Skipping earthquake: %s", exc)
            if max_runs is not None and len(reports) >= max_runs:
                break

        clock.sleep_until(clock.now() + config.poll_interval)

    logger.info("Stopped watching after %d polls, %d simulations", polls, len(reports))
    return reports

"""Earthquake event timeline: detection, P-wave, analysis, S-wave, analysis, end."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from eews_sim.clock import Clock, VirtualClock
from eews_sim.errors import InvalidEvent
from eews_sim.models import Building, EarthquakeEvent, Phase, PhaseEvent
from eews_sim.structural import (
    HIGH_THRESHOLD,
    MEDIUM_THRESHOLD,
    evaluate_all,
    validate_building,
)

logger = logging.getLogger(__name__)

Listener = Callable[[PhaseEvent], None]

PHASE_ORDER: tuple[Phase, ...] = tuple(Phase)


@dataclass(frozen=True)
class TimelineSettings:
    """Fixed dwell times of a run, in seconds."""

    detection_delay: float = 6.0
    p_wave_duration: float = 5.0
    s_wave_delay: float = 12.0
    s_wave_duration: float = 3.0

    @property
    def p_wave_offset(self) -> float:
        return self.detection_delay

    @property
    def s_wave_offset(self) -> float:
        return self.detection_delay + self.s_wave_delay


def validate_event(event: EarthquakeEvent) -> None:
    """Raise InvalidEvent for negative or non-finite magnitude or arrival offsets."""
    for name, value in (
        ("magnitude", event.magnitude),
        ("P-wave arrival time", event.p_wave_arrival),
        ("S-wave arrival time", event.s_wave_arrival),
    ):
        if not math.isfinite(value):
            raise InvalidEvent(f"{name} must be a finite number, got {value}")
    if event.magnitude < 0:
        raise InvalidEvent(f"magnitude must not be negative, got {event.magnitude}")
    if event.p_wave_arrival < 0:
        raise InvalidEvent(
            f"P-wave arrival time must not be negative, got {event.p_wave_arrival}"
        )
    if event.s_wave_arrival < 0:
        raise InvalidEvent(
            f"S-wave arrival time must not be negative, got {event.s_wave_arrival}"
        )


class TimelineRun:
    """A single pass over the phases of one earthquake.

    Iterating yields PhaseEvents lazily; the clock is advanced to each
    event's offset before it is yielded. A run cannot be restarted.
    """

    def __init__(
        self,
        event: EarthquakeEvent,
        buildings: list[Building],
        clock: Clock,
        settings: TimelineSettings,
        thresholds: tuple[float, float],
        listeners: list[Listener],
    ) -> None:
        self.event = event
        self.buildings = list(buildings)
        self.settings = settings
        self.thresholds = thresholds
        self.cancelled = False
        self.phase: Phase | None = None  # None while idle
        self.emitted: list[PhaseEvent] = []
        self._clock = clock
        self._listeners = list(listeners)
        self._origin: float | None = None  # set on the first step
        self._cancel_requested = False
        self._steps = self._phases()

    def __iter__(self) -> Iterator[PhaseEvent]:
        return self

    def __next__(self) -> PhaseEvent:
        if self.phase is Phase.COMPLETE:
            raise StopIteration
        if self._cancel_requested:
            self._stop_cancelled()
        phase_event = next(self._steps)

        if self._origin is None:
            self._origin = self._clock.now()
        self._clock.sleep_until(self._origin + phase_event.timestamp)
        if self._cancel_requested:
            self._stop_cancelled()

        self.phase = phase_event.phase
        self.emitted.append(phase_event)
        logger.debug(
            "Phase %s at t=%.1fs", phase_event.phase.value, phase_event.timestamp
        )
        for listener in self._listeners:
            listener(phase_event)
        return phase_event

    @property
    def done(self) -> bool:
        return self.cancelled or self.phase is Phase.COMPLETE

    def cancel(self) -> None:
        """Stop the run at the next phase boundary."""
        self._cancel_requested = True

    def run_to_completion(self) -> list[PhaseEvent]:
        """Drain the run and return every event it emitted."""
        for _ in self:
            pass
        return list(self.emitted)

    def _stop_cancelled(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self._steps.close()
            logger.info(
                "Timeline cancelled after %s",
                self.phase.value if self.phase else "start",
            )
        raise StopIteration

    def _phases(self) -> Iterator[PhaseEvent]:
        ev = self.event
        s = self.settings

        yield PhaseEvent(
            phase=Phase.DETECTED,
            timestamp=0.0,
            message=(
                f"Earthquake Detected - Magnitude: {ev.magnitude:g}, "
                f"P-Wave: {ev.p_wave_arrival:g}, S-Wave: {ev.s_wave_arrival:g}"
            ),
        )
        yield PhaseEvent(
            phase=Phase.P_WAVE,
            timestamp=s.p_wave_offset,
            duration=s.p_wave_duration,
            message="P-Wave simulated.",
        )
        yield PhaseEvent(
            phase=Phase.PREDICTIVE_ANALYSIS,
            timestamp=s.p_wave_offset,
            message="Predictive displacement analysis before S-wave.",
            assessments=tuple(
                evaluate_all(self.buildings, ev.magnitude, self.thresholds)
            ),
        )
        yield PhaseEvent(
            phase=Phase.S_WAVE,
            timestamp=s.s_wave_offset,
            duration=s.s_wave_duration,
            message="S-Wave simulated.",
        )
        yield PhaseEvent(
            phase=Phase.POST_ANALYSIS,
            timestamp=s.s_wave_offset,
            message="Structural response analysis after S-wave.",
            assessments=tuple(
                evaluate_all(self.buildings, ev.magnitude, self.thresholds)
            ),
        )
        yield PhaseEvent(
            phase=Phase.COMPLETE,
            timestamp=s.s_wave_offset,
            message="Earthquake simulation complete.",
        )


class TimelineDriver:
    """Creates timeline runs and fans their events out to listeners."""

    def __init__(
        self,
        clock: Clock | None = None,
        settings: TimelineSettings | None = None,
        thresholds: tuple[float, float] = (HIGH_THRESHOLD, MEDIUM_THRESHOLD),
        listeners: list[Listener] | None = None,
    ) -> None:
        self.clock = clock if clock is not None else VirtualClock()
        self.settings = settings if settings is not None else TimelineSettings()
        self.thresholds = thresholds
        self._listeners: list[Listener] = list(listeners or [])

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def start(self, event: EarthquakeEvent, buildings: list[Building]) -> TimelineRun:
        """Validate inputs and return a new, not yet started, run.

        Raises InvalidEvent or InvalidParameter before any PhaseEvent exists.
        """
        validate_event(event)
        for building in buildings:
            validate_building(building)
        logger.debug(
            "Starting timeline for M%.1f with %d buildings",
            event.magnitude,
            len(buildings),
        )
        return TimelineRun(
            event=event,
            buildings=buildings,
            clock=self.clock,
            settings=self.settings,
            thresholds=self.thresholds,
            listeners=self._listeners,
        )

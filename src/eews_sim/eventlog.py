"""Append-only text log of simulation events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from eews_sim.clock import local_now
from eews_sim.models import Phase, PhaseEvent

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_PHASE_TAGS = {
    Phase.DETECTED: "INFO",
    Phase.P_WAVE: "EVENT",
    Phase.S_WAVE: "EVENT",
    Phase.COMPLETE: "END",
}


def format_phase_lines(event: PhaseEvent) -> list[tuple[str, str]]:
    """Return ``(tag, message)`` pairs to log for a phase event.

    Analysis phases log one line per building and nothing else.
    """
    if event.phase is Phase.PREDICTIVE_ANALYSIS:
        return [
            (
                "PREDICTIVE",
                f"Building: {a.building_identifier}, "
                f"Predicted Displacement: {a.displacement:.3f}m, "
                f"Risk: {a.risk_level.value}",
            )
            for a in event.assessments
        ]
    if event.phase is Phase.POST_ANALYSIS:
        return [
            (
                "AFTERSHOCK",
                f"Building: {a.building_identifier}, "
                f"Actual Displacement: {a.displacement:.3f}m, "
                f"Risk: {a.risk_level.value}",
            )
            for a in event.assessments
        ]
    return [(_PHASE_TAGS[event.phase], event.message)]


def format_line(tag: str, message: str, when: datetime) -> str:
    return f"{when.strftime(TIMESTAMP_FORMAT)} - [{tag}] {message}"


class EventLog:
    """Writes tagged lines to a text file and mirrors them to ``logging``.

    Instances are callable so they can be subscribed to a timeline driver.
    """

    def __init__(self, path: Path, now: Callable[[], datetime] = local_now) -> None:
        self.path = path
        self._now = now

    def write(self, tag: str, message: str) -> str:
        line = format_line(tag, message, self._now())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
        logger.info(line)
        return line

    def __call__(self, event: PhaseEvent) -> None:
        for tag, message in format_phase_lines(event):
            self.write(tag, message)

"""Earthquake feed file parsing."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from eews_sim.errors import FeedError
from eews_sim.models import EarthquakeEvent

logger = logging.getLogger(__name__)


class WaveArrival(BaseModel):
    arrival_time: float


class FeedRecord(BaseModel):
    """Wire shape of the feed file.

    ``{"magnitude": 6.2, "p_wave": {"arrival_time": 3.1}, "s_wave": {"arrival_time": 7.4}}``
    """

    magnitude: float
    p_wave: WaveArrival
    s_wave: WaveArrival

    def to_event(self) -> EarthquakeEvent:
        return EarthquakeEvent(
            magnitude=self.magnitude,
            p_wave_arrival=self.p_wave.arrival_time,
            s_wave_arrival=self.s_wave.arrival_time,
        )


def parse_feed(text: str) -> EarthquakeEvent:
    """Parse a feed record. Range checks are left to the timeline driver."""
    try:
        record = FeedRecord.model_validate_json(text)
    except ValidationError as exc:
        raise FeedError(f"Invalid earthquake feed: {exc}") from exc
    return record.to_event()


def read_feed(path: Path) -> EarthquakeEvent | None:
    """Read the feed file, or return None if it does not exist yet."""
    if not path.exists():
        logger.debug("No feed file at %s", path)
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FeedError(f"Could not read earthquake feed {path}: {exc}") from exc
    return parse_feed(text)

"""Configuration model for the earthquake simulation."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from eews_sim.timeline import TimelineSettings

ReportFormat = Literal["json", "csv"]


class SimulationConfig(BaseSettings):
    """All configurable parameters for the simulation.

    Values can be set via constructor arguments, environment variables
    prefixed with EEWS_SIM_, or defaults.
    """

    model_config = {"env_prefix": "EEWS_SIM_"}

    feed_path: Path = Field(
        default=Path("earthquake_data.json"), description="Earthquake feed JSON file."
    )
    log_path: Path = Field(
        default=Path("earthquake_log.txt"), description="Append-only event log file."
    )
    poll_interval: float = Field(
        default=5.0, gt=0.0, description="Seconds between feed polls."
    )
    detection_delay: float = Field(
        default=6.0, ge=0.0, description="Seconds from detection to P-wave."
    )
    p_wave_duration: float = Field(
        default=5.0, ge=0.0, description="P-wave shaking duration in seconds."
    )
    s_wave_delay: float = Field(
        default=12.0, ge=0.0, description="Seconds from predictive analysis to S-wave."
    )
    s_wave_duration: float = Field(
        default=3.0, ge=0.0, description="S-wave shaking duration in seconds."
    )
    high_threshold: float = Field(
        default=0.5, gt=0.0, description="Displacement (m) above which risk is High."
    )
    medium_threshold: float = Field(
        default=0.2, gt=0.0, description="Displacement (m) above which risk is Medium."
    )
    realtime: bool = Field(
        default=False, description="Wait in real time between phases."
    )
    report_file: Path | None = Field(
        default=None, description="Optional report output path."
    )
    report_format: ReportFormat = Field(
        default="json", description="Report format: json or csv."
    )

    @model_validator(mode="after")
    def _check_thresholds(self) -> SimulationConfig:
        if self.medium_threshold >= self.high_threshold:
            raise ValueError("medium_threshold must be below high_threshold")
        return self

    @property
    def thresholds(self) -> tuple[float, float]:
        return (self.high_threshold, self.medium_threshold)

    def timeline_settings(self) -> TimelineSettings:
        return TimelineSettings(
            detection_delay=self.detection_delay,
            p_wave_duration=self.p_wave_duration,
            s_wave_delay=self.s_wave_delay,
            s_wave_duration=self.s_wave_duration,
        )

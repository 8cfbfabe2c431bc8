"""Data models for the earthquake simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Phase(str, Enum):
    """Timeline phases, declared in the order a run emits them."""

    DETECTED = "Detected"
    P_WAVE = "PWave"
    PREDICTIVE_ANALYSIS = "PredictiveAnalysis"
    S_WAVE = "SWave"
    POST_ANALYSIS = "PostAnalysis"
    COMPLETE = "Complete"


@dataclass(frozen=True)
class EarthquakeEvent:
    """Earthquake parameters read from the feed."""

    magnitude: float
    p_wave_arrival: float
    s_wave_arrival: float


@dataclass(frozen=True)
class Building:
    """Structural parameters of a single building in the scene."""

    identifier: str
    elastic_modulus: float
    moment_of_inertia: float
    height: float
    floors: int = 0


@dataclass(frozen=True)
class RiskAssessment:
    """Displacement estimate and risk category for one building."""

    building_identifier: str
    displacement: float
    risk_level: RiskLevel


@dataclass(frozen=True)
class PhaseEvent:
    """One step of an earthquake timeline.

    ``timestamp`` is seconds since the event was detected. ``duration`` is
    how long the host should keep the phase's effects running (shaking);
    it does not shift later timestamps.
    """

    phase: Phase
    timestamp: float
    duration: float = 0.0
    message: str = ""
    assessments: tuple[RiskAssessment, ...] = field(default_factory=tuple)


@dataclass
class SimulationReport:
    """Everything one simulated earthquake produced."""

    event: EarthquakeEvent
    phases: list[PhaseEvent] = field(default_factory=list)
    predictive: list[RiskAssessment] = field(default_factory=list)
    post: list[RiskAssessment] = field(default_factory=list)
    cancelled: bool = False

    @property
    def high_risk_buildings(self) -> list[str]:
        return [
            a.building_identifier for a in self.post if a.risk_level is RiskLevel.HIGH
        ]

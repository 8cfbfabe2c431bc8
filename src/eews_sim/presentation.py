"""Engine-free descriptors of the scene effects for each phase.

The timeline only reports; these helpers turn its events into what a
renderer needs (shake parameters, UI text, building colour and tilt).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from eews_sim.models import Phase, PhaseEvent, RiskAssessment, RiskLevel


@dataclass(frozen=True)
class ShakeProfile:
    """Camera shake: random offsets within +/- intensity * 0.1 for duration seconds."""

    intensity: float
    duration: float


@dataclass(frozen=True)
class BuildingResponse:
    """How a building should look after the S-wave."""

    building_identifier: str
    color: str
    tilt_degrees: float
    alert_text: str


_SHAKE_INTENSITY = {
    Phase.P_WAVE: 0.01,
    Phase.S_WAVE: 1.0,
}

_PHASE_ALERTS = {
    Phase.P_WAVE: "P-Wave Detected: Minor shaking expected!",
    Phase.S_WAVE: "S-Wave Detected: Strong shaking incoming!",
    Phase.COMPLETE: "Earthquake Over.",
}


def shake_profile(event: PhaseEvent) -> ShakeProfile | None:
    """Shake parameters for wave phases, None for every other phase."""
    intensity = _SHAKE_INTENSITY.get(event.phase)
    if intensity is None:
        return None
    return ShakeProfile(intensity=intensity, duration=event.duration)


def alert_text(event: PhaseEvent) -> str | None:
    return _PHASE_ALERTS.get(event.phase)


def predictive_alert(assessment: RiskAssessment) -> str | None:
    """Warning shown before the S-wave for buildings at high risk."""
    if assessment.risk_level is RiskLevel.HIGH:
        return f"WARNING: {assessment.building_identifier} at HIGH risk before S-wave!"
    return None


class AlertSign:
    """Warning sign state across one run.

    Raised by a High predictive result and kept up through the S-wave;
    lowered once post analysis has run. Subscribe an instance to a driver.
    """

    def __init__(self) -> None:
        self.active = False

    def __call__(self, event: PhaseEvent) -> None:
        if event.phase is Phase.DETECTED:
            self.active = False
        elif event.phase is Phase.PREDICTIVE_ANALYSIS:
            self.active = any(a.risk_level is RiskLevel.HIGH for a in event.assessments)
        elif event.phase is Phase.POST_ANALYSIS:
            self.active = False


def building_response(assessment: RiskAssessment, floors: int) -> BuildingResponse:
    name = assessment.building_identifier
    if assessment.risk_level is RiskLevel.HIGH:
        return BuildingResponse(name, "red", 10.0 + floors, f"Severe Damage Risk: {name}")
    if assessment.risk_level is RiskLevel.MEDIUM:
        return BuildingResponse(
            name, "yellow", 5.0 + floors * 0.5, f"Moderate Risk: {name}"
        )
    return BuildingResponse(name, "green", 0.0, f"{name} is stable.")



class SceneNarrator:
    """Turns phase events into the scene updates a renderer would apply.

    Each update is passed to *emit* as one line of text.
    """

    def __init__(
        self,
        emit: Callable[[str], None],
        floors: dict[str, int] | None = None,
    ) -> None:
        self.emit = emit
        self.floors = floors or {}
        self.sign = AlertSign()

    def __call__(self, event: PhaseEvent) -> None:
        was_active = self.sign.active
        self.sign(event)

        text = alert_text(event)
        if text is not None:
            self.emit(f"Alert: {text}")

        shake = shake_profile(event)
        if shake is not None:
            self.emit(f"Shake: intensity {shake.intensity:g} for {shake.duration:g}s")

        if event.phase is Phase.PREDICTIVE_ANALYSIS:
            for a in event.assessments:
                warning = predictive_alert(a)
                if warning is not None:
                    self.emit(f"Alert: {warning}")
        elif event.phase is Phase.POST_ANALYSIS:
            for a in event.assessments:
                r = building_response(a, self.floors.get(a.building_identifier, 0))
                self.emit(
                    f"Building {r.building_identifier}: {r.color}, "
                    f"tilt {r.tilt_degrees:g} deg ({r.alert_text})"
                )

        if self.sign.active != was_active:
            self.emit(f"Alert sign {'on' if self.sign.active else 'off'}")

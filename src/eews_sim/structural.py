"""Structural displacement estimate and risk classification."""

from __future__ import annotations

import math

from eews_sim.errors import InvalidParameter
from eews_sim.models import Building, RiskAssessment, RiskLevel

HIGH_THRESHOLD = 0.5  # meters
MEDIUM_THRESHOLD = 0.2  # meters

FORCE_PER_MAGNITUDE = 100_000.0


def validate_building(building: Building) -> None:
    """Raise InvalidParameter if the building cannot be evaluated."""
    for name, value in (
        ("elastic modulus", building.elastic_modulus),
        ("moment of inertia", building.moment_of_inertia),
        ("height", building.height),
    ):
        if not math.isfinite(value):
            raise InvalidParameter(
                f"{building.identifier}: {name} must be a finite number, got {value}"
            )
    if building.elastic_modulus <= 0:
        raise InvalidParameter(
            f"{building.identifier}: elastic modulus must be positive, "
            f"got {building.elastic_modulus}"
        )
    if building.moment_of_inertia <= 0:
        raise InvalidParameter(
            f"{building.identifier}: moment of inertia must be positive, "
            f"got {building.moment_of_inertia}"
        )
    if building.height < 0:
        raise InvalidParameter(
            f"{building.identifier}: height must not be negative, got {building.height}"
        )
    if building.floors < 0:
        raise InvalidParameter(
            f"{building.identifier}: floors must not be negative, got {building.floors}"
        )


def lateral_force(magnitude: float, floors: int) -> float:
    """Equivalent lateral load; taller buildings attract 10% more per floor."""
    return magnitude * FORCE_PER_MAGNITUDE * (1 + floors * 0.1)


def calculate_displacement(building: Building, magnitude: float) -> float:
    """Tip deflection of a cantilever under a point load, amplified per floor.

    Formula::

        delta = F * L^3 / (3 * E * I) * (1 + floors * 0.05)

    where F is ``lateral_force(magnitude, floors)`` and L is the height.
    """
    validate_building(building)
    if not math.isfinite(magnitude) or magnitude < 0:
        raise InvalidParameter(
            f"magnitude must be a finite non-negative number, got {magnitude}"
        )

    force = lateral_force(magnitude, building.floors)
    deflection = (force * building.height**3) / (
        3 * building.elastic_modulus * building.moment_of_inertia
    )
    return deflection * (1 + building.floors * 0.05)


def classify_displacement(
    displacement: float,
    high_threshold: float = HIGH_THRESHOLD,
    medium_threshold: float = MEDIUM_THRESHOLD,
) -> RiskLevel:
    """Map a displacement to a risk level. Both thresholds are exclusive."""
    if displacement > high_threshold:
        return RiskLevel.HIGH
    if displacement > medium_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def evaluate(
    building: Building,
    magnitude: float,
    thresholds: tuple[float, float] = (HIGH_THRESHOLD, MEDIUM_THRESHOLD),
) -> RiskAssessment:
    """Estimate displacement for *building* under *magnitude* and classify it.

    *thresholds* is ``(high, medium)``.
    """
    high, medium = thresholds
    displacement = calculate_displacement(building, magnitude)
    return RiskAssessment(
        building_identifier=building.identifier,
        displacement=displacement,
        risk_level=classify_displacement(displacement, high, medium),
    )


def evaluate_all(
    buildings: list[Building],
    magnitude: float,
    thresholds: tuple[float, float] = (HIGH_THRESHOLD, MEDIUM_THRESHOLD),
) -> list[RiskAssessment]:
    """Evaluate every building, preserving input order."""
    return [evaluate(b, magnitude, thresholds) for b in buildings]

"""CSV exporter for simulation reports."""

from __future__ import annotations

import csv
from pathlib import Path

from eews_sim.models import SimulationReport

FIELDNAMES = [
    "stage",
    "building",
    "magnitude",
    "displacement_m",
    "risk_level",
]


def export_csv(
    report: SimulationReport,
    output_path: Path,
) -> Path:
    """Export assessments as a flat CSV with one row per building per stage."""
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()

        for stage, assessments in (
            ("predictive", report.predictive),
            ("post", report.post),
        ):
            for a in assessments:
                writer.writerow({
                    "stage": stage,
                    "building": a.building_identifier,
                    "magnitude": report.event.magnitude,
                    "displacement_m": round(a.displacement, 6),
                    "risk_level": a.risk_level.value,
                })

    return output_path

"""JSON exporter for simulation reports."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from eews_sim.models import SimulationReport


def export_json(
    report: SimulationReport,
    output_path: Path,
    indent: int = 2,
) -> Path:
    """Export a simulation report to a JSON file."""
    data = asdict(report)
    data["high_risk_buildings"] = report.high_risk_buildings
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
    return output_path

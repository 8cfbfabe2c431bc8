"""Building definitions loader."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from eews_sim.errors import BuildingDataError
from eews_sim.models import Building

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "identifier",
    "elastic_modulus",
    "moment_of_inertia",
    "height",
    "floors",
]


def _read_frame(path: Path) -> pd.DataFrame:
    """Read a CSV, or a JSON array of records for ``.json`` files."""
    if not path.exists():
        raise BuildingDataError(f"Building file not found: {path}")
    try:
        if path.suffix.lower() == ".json":
            return pd.read_json(path, orient="records")
        return pd.read_csv(path)
    except ValueError as exc:
        raise BuildingDataError(f"Could not parse {path}: {exc}") from exc


def load_buildings(path: Path) -> list[Building]:
    """Load building definitions, preserving file order."""
    df = _read_frame(path)
    if df.empty:
        logger.warning("No buildings defined in %s", path)
        return []

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise BuildingDataError(f"{path} is missing columns: {', '.join(missing)}")

    if df[REQUIRED_COLUMNS].isna().any().any():
        raise BuildingDataError(f"{path} has empty values in required columns")

    buildings: list[Building] = []
    for _, row in df.iterrows():
        buildings.append(
            Building(
                identifier=str(row["identifier"]),
                elastic_modulus=float(row["elastic_modulus"]),
                moment_of_inertia=float(row["moment_of_inertia"]),
                height=float(row["height"]),
                floors=int(row["floors"]),
            )
        )
    logger.info("Loaded %d buildings from %s", len(buildings), path)
    return buildings

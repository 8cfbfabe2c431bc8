"""Shared fixtures for eews_sim tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from eews_sim.config import SimulationConfig
from eews_sim.models import Building, EarthquakeEvent


@pytest.fixture
def sample_event() -> EarthquakeEvent:
    return EarthquakeEvent(magnitude=5.0, p_wave_arrival=2.5, s_wave_arrival=6.0)


@pytest.fixture
def steel_tower() -> Building:
    """Displacement ~2.37 m at M5.0 (High)."""
    return Building(
        identifier="Tower",
        elastic_modulus=2.1e11,
        moment_of_inertia=0.0005,
        height=10.0,
        floors=3,
    )


@pytest.fixture
def sample_buildings(steel_tower: Building) -> list[Building]:
    """Pre-built buildings for unit tests.

    At M1.5: Tower is High (0.712 m), Office is Medium (0.476 m),
    Bunker is Low (0.0 m, zero height).
    """
    return [
        steel_tower,
        Building(
            identifier="Office",
            elastic_modulus=2.1e11,
            moment_of_inertia=0.0005,
            height=10.0,
            floors=0,
        ),
        Building(
            identifier="Bunker",
            elastic_modulus=3.0e10,
            moment_of_inertia=2.0,
            height=0.0,
            floors=0,
        ),
    ]


@pytest.fixture
def feed_payload() -> dict:
    return {"magnitude": 5.0, "p_wave": {"arrival_time": 2.5}, "s_wave": {"arrival_time": 6.0}}


@pytest.fixture
def feed_file(tmp_path: Path, feed_payload: dict) -> Path:
    path = tmp_path / "earthquake_data.json"
    path.write_text(json.dumps(feed_payload))
    return path


@pytest.fixture
def buildings_csv(tmp_path: Path) -> Path:
    path = tmp_path / "buildings.csv"
    path.write_text(
        "identifier,elastic_modulus,moment_of_inertia,height,floors\n"
        "Tower,2.1e11,0.0005,10,3\n"
        "Office,2.1e11,0.0005,10,0\n"
        "Bunker,3.0e10,2.0,0,0\n"
    )
    return path


@pytest.fixture
def default_config(tmp_path: Path) -> SimulationConfig:
    """Config with defaults, reading and writing under tmp_path."""
    return SimulationConfig(
        feed_path=tmp_path / "earthquake_data.json",
        log_path=tmp_path / "earthquake_log.txt",
    )

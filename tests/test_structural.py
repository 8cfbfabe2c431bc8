"""Tests for the structural displacement and risk module."""

from dataclasses import replace

import pytest

from eews_sim.errors import InvalidParameter
from eews_sim.models import RiskAssessment, RiskLevel
from eews_sim.structural import (
    calculate_displacement,
    classify_displacement,
    evaluate,
    evaluate_all,
    lateral_force,
)


class TestLateralForce:
    def test_no_floors(self):
        assert lateral_force(5.0, 0) == pytest.approx(500_000.0)

    def test_floor_amplification(self):
        assert lateral_force(5.0, 3) == pytest.approx(650_000.0)

    def test_zero_magnitude(self):
        assert lateral_force(0.0, 10) == 0.0


class TestCalculateDisplacement:
    def test_reference_building(self, steel_tower):
        expected = (650_000 * 10**3) / (3 * 2.1e11 * 0.0005) * 1.15
        assert calculate_displacement(steel_tower, 5.0) == pytest.approx(expected)
        assert calculate_displacement(steel_tower, 5.0) == pytest.approx(2.373, abs=1e-3)

    def test_zero_magnitude_is_zero(self, steel_tower):
        assert calculate_displacement(steel_tower, 0.0) == 0.0

    def test_zero_height_is_zero(self, steel_tower):
        assert calculate_displacement(replace(steel_tower, height=0.0), 7.0) == 0.0

    def test_monotonic_in_magnitude(self, steel_tower):
        values = [calculate_displacement(steel_tower, m / 2) for m in range(0, 20)]
        assert values == sorted(values)

    @pytest.mark.parametrize("field", ["elastic_modulus", "moment_of_inertia"])
    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_non_positive_constants_raise(self, steel_tower, field, value):
        with pytest.raises(InvalidParameter, match=field.replace("_", " ")):
            calculate_displacement(replace(steel_tower, **{field: value}), 5.0)

    def test_negative_height_raises(self, steel_tower):
        with pytest.raises(InvalidParameter, match="height"):
            calculate_displacement(replace(steel_tower, height=-1.0), 5.0)

    def test_negative_floors_raises(self, steel_tower):
        with pytest.raises(InvalidParameter, match="floors"):
            calculate_displacement(replace(steel_tower, floors=-2), 5.0)

    def test_negative_magnitude_raises(self, steel_tower):
        with pytest.raises(InvalidParameter, match="magnitude"):
            calculate_displacement(steel_tower, -1.0)

    @pytest.mark.parametrize("field", ["elastic_modulus", "moment_of_inertia", "height"])
    def test_nan_constants_raise(self, steel_tower, field):
        with pytest.raises(InvalidParameter, match="finite"):
            calculate_displacement(replace(steel_tower, **{field: float("nan")}), 5.0)

    def test_nan_magnitude_raises(self, steel_tower):
        with pytest.raises(InvalidParameter, match="magnitude"):
            calculate_displacement(steel_tower, float("nan"))

    def test_invalid_parameter_is_value_error(self, steel_tower):
        with pytest.raises(ValueError):
            calculate_displacement(replace(steel_tower, elastic_modulus=0.0), 5.0)


class TestClassifyDisplacement:
    def test_high(self):
        assert classify_displacement(0.51) is RiskLevel.HIGH

    def test_exactly_high_threshold_is_medium(self):
        assert classify_displacement(0.5) is RiskLevel.MEDIUM

    def test_medium(self):
        assert classify_displacement(0.3) is RiskLevel.MEDIUM

    def test_exactly_medium_threshold_is_low(self):
        assert classify_displacement(0.2) is RiskLevel.LOW

    def test_zero_is_low(self):
        assert classify_displacement(0.0) is RiskLevel.LOW

    def test_custom_thresholds(self):
        assert classify_displacement(0.3, high_threshold=0.25, medium_threshold=0.1) is RiskLevel.HIGH


class TestEvaluate:
    def test_returns_assessment(self, steel_tower):
        result = evaluate(steel_tower, 5.0)
        assert isinstance(result, RiskAssessment)
        assert result.building_identifier == "Tower"
        assert result.risk_level is RiskLevel.HIGH

    def test_pure(self, steel_tower):
        assert evaluate(steel_tower, 4.2) == evaluate(steel_tower, 4.2)

    def test_levels_for_sample_buildings(self, sample_buildings):
        levels = [a.risk_level for a in evaluate_all(sample_buildings, 1.5)]
        assert levels == [RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW]

    def test_thresholds_override(self, sample_buildings):
        office = sample_buildings[1]
        assert evaluate(office, 1.5, thresholds=(0.4, 0.1)).risk_level is RiskLevel.HIGH

    def test_evaluate_all_preserves_order(self, sample_buildings):
        ids = [a.building_identifier for a in evaluate_all(sample_buildings, 3.0)]
        assert ids == ["Tower", "Office", "Bunker"]

    def test_evaluate_all_empty(self):
        assert evaluate_all([], 6.0) == []

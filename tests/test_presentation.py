"""Tests for scene effect descriptors."""

from eews_sim.models import EarthquakeEvent, Phase, PhaseEvent, RiskAssessment, RiskLevel
from eews_sim.presentation import (
    AlertSign,
    SceneNarrator,
    ShakeProfile,
    alert_text,
    building_response,
    predictive_alert,
    shake_profile,
)
from eews_sim.timeline import TimelineDriver


class TestShakeProfile:
    def test_p_wave_is_mild(self):
        event = PhaseEvent(phase=Phase.P_WAVE, timestamp=6.0, duration=5.0)
        assert shake_profile(event) == ShakeProfile(intensity=0.01, duration=5.0)

    def test_s_wave_is_strong(self):
        event = PhaseEvent(phase=Phase.S_WAVE, timestamp=18.0, duration=3.0)
        assert shake_profile(event) == ShakeProfile(intensity=1.0, duration=3.0)

    def test_no_shake_for_analysis(self):
        assert shake_profile(PhaseEvent(phase=Phase.POST_ANALYSIS, timestamp=18.0)) is None


class TestAlerts:
    def test_phase_texts(self):
        assert alert_text(PhaseEvent(Phase.P_WAVE, 6.0)) == "P-Wave Detected: Minor shaking expected!"
        assert alert_text(PhaseEvent(Phase.S_WAVE, 18.0)) == "S-Wave Detected: Strong shaking incoming!"
        assert alert_text(PhaseEvent(Phase.COMPLETE, 18.0)) == "Earthquake Over."
        assert alert_text(PhaseEvent(Phase.DETECTED, 0.0)) is None

    def test_predictive_alert_only_for_high(self):
        high = RiskAssessment("Tower", 0.9, RiskLevel.HIGH)
        medium = RiskAssessment("Office", 0.3, RiskLevel.MEDIUM)
        assert predictive_alert(high) == "WARNING: Tower at HIGH risk before S-wave!"
        assert predictive_alert(medium) is None


class TestBuildingResponse:
    def test_high(self):
        r = building_response(RiskAssessment("Tower", 0.9, RiskLevel.HIGH), floors=3)
        assert (r.color, r.tilt_degrees, r.alert_text) == ("red", 13.0, "Severe Damage Risk: Tower")

    def test_medium(self):
        r = building_response(RiskAssessment("Office", 0.3, RiskLevel.MEDIUM), floors=4)
        assert (r.color, r.tilt_degrees, r.alert_text) == ("yellow", 7.0, "Moderate Risk: Office")

    def test_low(self):
        r = building_response(RiskAssessment("Shed", 0.0, RiskLevel.LOW), floors=1)
        assert (r.color, r.tilt_degrees, r.alert_text) == ("green", 0.0, "Shed is stable.")


class TestAlertSign:
    def _states(self, buildings, magnitude):
        sign = AlertSign()
        states = []

        def record(event):
            states.append((event.phase, sign.active))

        driver = TimelineDriver(listeners=[sign, record])
        event = EarthquakeEvent(magnitude=magnitude, p_wave_arrival=1.0, s_wave_arrival=3.0)
        driver.start(event, buildings).run_to_completion()
        return states

    def test_held_through_s_wave(self, sample_buildings):
        assert self._states(sample_buildings, 1.5) == [
            (Phase.DETECTED, False),
            (Phase.P_WAVE, False),
            (Phase.PREDICTIVE_ANALYSIS, True),
            (Phase.S_WAVE, True),
            (Phase.POST_ANALYSIS, False),
            (Phase.COMPLETE, False),
        ]

    def test_stays_down_without_high_risk(self, sample_buildings):
        states = self._states(sample_buildings, 0.5)
        assert not any(active for _, active in states)

    def test_reset_on_new_detection(self):
        sign = AlertSign()
        sign(PhaseEvent(Phase.PREDICTIVE_ANALYSIS, 6.0, assessments=(RiskAssessment("T", 0.9, RiskLevel.HIGH),)))
        assert sign.active
        sign(PhaseEvent(Phase.DETECTED, 0.0))
        assert not sign.active


class TestSceneNarrator:
    def test_full_run(self, sample_buildings):
        lines = []
        narrator = SceneNarrator(lines.append, floors={"Tower": 3, "Office": 0})
        event = EarthquakeEvent(magnitude=1.5, p_wave_arrival=1.0, s_wave_arrival=3.0)
        TimelineDriver(listeners=[narrator]).start(event, sample_buildings).run_to_completion()

        assert lines == [
            "Alert: P-Wave Detected: Minor shaking expected!",
            "Shake: intensity 0.01 for 5s",
            "Alert: WARNING: Tower at HIGH risk before S-wave!",
            "Alert sign on",
            "Alert: S-Wave Detected: Strong shaking incoming!",
            "Shake: intensity 1 for 3s",
            "Building Tower: red, tilt 13 deg (Severe Damage Risk: Tower)",
            "Building Office: yellow, tilt 5 deg (Moderate Risk: Office)",
            "Building Bunker: green, tilt 0 deg (Bunker is stable.)",
            "Alert sign off",
            "Alert: Earthquake Over.",
        ]

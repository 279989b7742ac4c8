"""Tests for services.scoring and services.translate."""
import pytest

from services.scoring import (
    RiskBand,
    BAND_LABELS,
    INCREASED,
    DECREASED,
    NO_CHANGE,
    calculate_risk_level,
    classify_risk_level,
    risk_change,
    risk_label,
)
from services.translate import translate_band, translate_direction


class TestCalculateRiskLevel:
    def test_product_of_impact_and_likelihood(self):
        assert calculate_risk_level(4, 4) == 16
        assert calculate_risk_level(1, 5) == 5

    def test_bounds(self):
        assert calculate_risk_level(1, 1) == 1
        assert calculate_risk_level(5, 5) == 25

    @pytest.mark.parametrize("impact", range(1, 6))
    @pytest.mark.parametrize("likelihood", range(1, 6))
    def test_every_score_pair_lands_in_range(self, impact, likelihood):
        level = calculate_risk_level(impact, likelihood)
        assert level == impact * likelihood
        assert 1 <= level <= 25
        assert classify_risk_level(level) != RiskBand.UNASSESSED


class TestClassifyRiskLevel:
    @pytest.mark.parametrize("level,band", [
        (1, RiskBand.LOW),
        (4, RiskBand.LOW),
        (5, RiskBand.MEDIUM),
        (9, RiskBand.MEDIUM),
        (10, RiskBand.HIGH),
        (16, RiskBand.HIGH),
        (17, RiskBand.CRITICAL),
        (25, RiskBand.CRITICAL),
    ])
    def test_band_boundaries(self, level, band):
        assert classify_risk_level(level) == band

    def test_missing_level_is_unassessed(self):
        assert classify_risk_level(None) == RiskBand.UNASSESSED
        assert classify_risk_level(0) == RiskBand.UNASSESSED

    def test_unassessed_is_not_low(self):
        assert classify_risk_level(None) != RiskBand.LOW

    def test_labels(self):
        assert risk_label(16) == "High Risk"
        assert risk_label(20) == "Critical Risk"
        assert risk_label(None) == "Unassessed"
        assert set(BAND_LABELS) == set(RiskBand)


class TestRiskChange:
    @pytest.mark.parametrize("current,prior,delta,direction", [
        (9, 6, 3, INCREASED),
        (4, 9, -5, DECREASED),
        (6, 6, 0, NO_CHANGE),
        (5, None, 5, INCREASED),
    ])
    def test_delta_and_direction(self, current, prior, delta, direction):
        change = risk_change(current, prior)
        assert change.delta == delta
        assert change.direction == direction

    def test_increase(self):
        change = risk_change(16, 9)
        assert change.delta == 7
        assert change.direction == INCREASED
        assert change.has_prior is True

    def test_decrease(self):
        change = risk_change(4, 12)
        assert change.delta == -8
        assert change.direction == DECREASED

    def test_no_change(self):
        assert risk_change(8, 8).direction == NO_CHANGE

    def test_missing_prior_counts_as_zero(self):
        change = risk_change(12, None)
        assert change.delta == 12
        assert change.direction == INCREASED
        assert change.has_prior is False

    def test_both_missing(self):
        change = risk_change(None, None)
        assert change.delta == 0
        assert change.direction == NO_CHANGE


class TestTranslate:
    def test_band_in_chinese(self):
        assert translate_band(RiskBand.HIGH, "zh") == "高風險"
        assert translate_band(RiskBand.UNASSESSED, "zh") == "未評估"

    def test_band_in_english(self):
        assert translate_band(RiskBand.LOW, "en") == "Low Risk"

    def test_direction(self):
        assert translate_direction(INCREASED, "zh") == "上升"
        assert translate_direction(NO_CHANGE, "en") == "no change"

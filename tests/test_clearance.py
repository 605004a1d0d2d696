"""Tests for clearance and pass-probability estimates."""

import pytest

from detox_tracker.models import UsageFrequency
from detox_tracker.services.clearance import (
    BASELINE_DAYS,
    InvalidUsageFrequencyError,
    baseline_days,
    estimate_remaining,
    pass_probability,
    round_half_up,
)


class TestEstimateRemaining:
    """Tests for the linear clearance estimate."""
    
    @pytest.mark.parametrize("frequency", list(UsageFrequency))
    def test_starts_at_100(self, frequency):
        assert estimate_remaining(frequency, 0) == 100
    
    @pytest.mark.parametrize("frequency", list(UsageFrequency))
    def test_zero_from_baseline_on(self, frequency):
        baseline = BASELINE_DAYS[frequency]
        for days in (baseline, baseline + 1, baseline * 3):
            assert estimate_remaining(frequency, days) == 0
    
    @pytest.mark.parametrize("frequency", list(UsageFrequency))
    def test_non_increasing(self, frequency):
        values = [estimate_remaining(frequency, d) for d in range(40)]
        assert values == sorted(values, reverse=True)
    
    def test_baselines(self):
        assert baseline_days("light") == 7
        assert baseline_days("moderate") == 15
        assert baseline_days("heavy") == 30
    
    def test_light_example(self):
        """3 of 7 days: round(100 - 42.86) = 57."""
        assert estimate_remaining(UsageFrequency.LIGHT, 3) == 57
        assert estimate_remaining(UsageFrequency.LIGHT, 7) == 0
    
    def test_heavy_example(self):
        assert estimate_remaining("heavy", 2) == 93
        assert estimate_remaining("heavy", 15) == 50
    
    def test_accepts_plain_strings(self):
        assert estimate_remaining("moderate", 5) == estimate_remaining(UsageFrequency.MODERATE, 5)
    
    @pytest.mark.parametrize("frequency", ["extreme", "", None, "Heavy"])
    def test_unknown_frequency_fails(self, frequency):
        with pytest.raises(InvalidUsageFrequencyError):
            estimate_remaining(frequency, 1)
    
    def test_invalid_frequency_is_value_error(self):
        assert issubclass(InvalidUsageFrequencyError, ValueError)
    
    def test_negative_days_rejected(self):
        with pytest.raises(ValueError):
            estimate_remaining("light", -1)


class TestPassProbability:
    """Tests for the pass-probability complement."""
    
    def test_light_examples(self):
        assert pass_probability(estimate_remaining("light", 7)) == 100
        assert pass_probability(estimate_remaining("light", 3)) == 43
    
    @pytest.mark.parametrize("percent", [0, 1, 37, 50, 99, 100])
    def test_complement(self, percent):
        assert pass_probability(percent) + percent == 100
    
    def test_clamped(self):
        assert pass_probability(120) == 0
        assert pass_probability(-5) == 100


class TestRoundHalfUp:

    def test_halves_round_up(self):
        assert round_half_up(42.5) == 43
        assert round_half_up(4.25, 1) == 4.3
        assert round_half_up(0.5) == 1
    
    def test_other_values(self):
        assert round_half_up(57.14) == 57
        assert round_half_up(4.333, 1) == 4.3

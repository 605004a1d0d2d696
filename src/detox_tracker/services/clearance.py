"""Clearance and pass-probability estimates.

A linear heuristic: the detectable amount decays from 100% to zero over a
baseline period chosen by usage frequency. It is not a pharmacokinetic model.
"""

import math
from typing import Union

from ..models.preferences import UsageFrequency

BASELINE_DAYS = {
    UsageFrequency.LIGHT: 7,
    UsageFrequency.MODERATE: 15,
    UsageFrequency.HEAVY: 30,
}


class InvalidUsageFrequencyError(ValueError):
    """Raised for a usage frequency outside light/moderate/heavy."""


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values (Python's round is banker's)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def resolve_frequency(usage_frequency: Union[UsageFrequency, str]) -> UsageFrequency:
    try:
        return UsageFrequency(usage_frequency)
    except ValueError:
        raise InvalidUsageFrequencyError(
            f"Unknown usage frequency: {usage_frequency!r} "
            f"(expected one of {', '.join(f.value for f in UsageFrequency)})"
        ) from None


def baseline_days(usage_frequency: Union[UsageFrequency, str]) -> int:
    """Days until the estimate reaches zero for a usage frequency."""
    return BASELINE_DAYS[resolve_frequency(usage_frequency)]


def estimate_remaining(usage_frequency: Union[UsageFrequency, str], days_clean: int) -> int:
    """
    Estimate the percentage of substance still detectable.
    
    Args:
        usage_frequency: light, moderate or heavy
        days_clean: whole days since the first log
    
    Returns:
        Integer percentage in [0, 100].
    """
    baseline = baseline_days(usage_frequency)
    if days_clean < 0:
        raise ValueError(f"days_clean must be non-negative, got {days_clean}")
    
    remaining = max(0.0, 100 - (days_clean / baseline * 100))
    return int(round_half_up(remaining))


def pass_probability(percent_remaining: int) -> int:
    """Estimated chance of a negative test, the complement of the remaining percentage."""
    return max(0, min(100, 100 - percent_remaining))

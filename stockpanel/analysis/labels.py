"""Discretise annual price change into ordinal classes."""

from __future__ import annotations

SEVERE_DECLINE = 0
DECLINE = 1
MODERATE_GAIN = 2
STRONG_GAIN = 3

# Percent-change bucket edges.
SEVERE_DECLINE_BELOW = -50.0
GAIN_FROM = 0.0
STRONG_GAIN_FROM = 50.0


def categorize_price_change(percent_change: float) -> int:
    """Bucket a percent price change into 0-3.

    < -50 is 0, [-50, 0) is 1, [0, 50) is 2, and everything else
    (including exactly 50 and NaN) is 3.
    """
    if percent_change < SEVERE_DECLINE_BELOW:
        return SEVERE_DECLINE
    if percent_change < GAIN_FROM:
        return DECLINE
    if percent_change < STRONG_GAIN_FROM:
        return MODERATE_GAIN
    return STRONG_GAIN

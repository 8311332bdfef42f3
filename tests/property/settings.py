"""Standardized Hypothesis settings profiles for property tests.

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(intervals=zero_intervals)
    @STANDARD_SETTINGS
    def test_something(intervals):
        ...

Tiers:
- STANDARD_SETTINGS: 100 examples - Regular property tests
- QUICK_SETTINGS: 20 examples - Fast validation tests (simple rejection)
"""

from hypothesis import settings

# Standard property tests - good balance of coverage and speed
STANDARD_SETTINGS = settings(max_examples=100)

# Quick validation tests - simple input rejection
QUICK_SETTINGS = settings(max_examples=20)

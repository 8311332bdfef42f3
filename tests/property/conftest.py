# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import interval_sequences, outcome_plans

    @given(intervals=interval_sequences)
    def test_limit(intervals: list[float]) -> None:
        ...
"""

from __future__ import annotations

import threading
from datetime import timedelta

from hypothesis import strategies as st

# Interval values the executor must accept: zero, tiny, and large waits.
# MockClock never blocks, so large values are free.
valid_seconds = st.floats(min_value=0.0, max_value=1e6, allow_nan=False, allow_infinity=False)

valid_durations = st.one_of(
    valid_seconds,
    st.integers(min_value=0, max_value=10_000),
    st.timedeltas(min_value=timedelta(0), max_value=timedelta(days=1)),
)

interval_sequences = st.lists(valid_seconds, max_size=20)

repeat_counts = st.integers(min_value=0, max_value=20)

invalid_seconds = st.one_of(
    st.floats(max_value=-1e-9, allow_nan=False, allow_infinity=False),
    st.floats(min_value=threading.TIMEOUT_MAX * 2, allow_nan=False, allow_infinity=False),
    st.just(float("nan")),
    st.just(float("inf")),
    st.just(float("-inf")),
)

# Per-attempt plan: "ok" succeeds, "return" returns an error, "raise" raises one
attempt_kinds = st.sampled_from(["ok", "return", "raise"])
failure_kinds = st.sampled_from(["return", "raise"])
outcome_plans = st.lists(attempt_kinds, min_size=1, max_size=21)

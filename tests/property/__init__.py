# tests/property/__init__.py
"""Property-based tests for retryloop.

Property-based testing checks invariants that must hold for ALL inputs,
not just the examples we think of: attempt counts, wait order, failure
order and the equivalence of the two entry points.

Test categories:
- engine/: Attempt loop properties for the sync and async executors
"""

"""Tests for retryloop.contracts.

Covers the error types executors raise (ErrorAggregate, NilOperationError,
InvalidScheduleError) and RetrySchedule construction and normalisation.
"""

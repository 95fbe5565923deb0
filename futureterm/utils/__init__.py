"""
Utility modules for Future Terminal.

Provides error handling with verbose logging for the event producer,
the stats sampler and terminal setup.
"""

from .error_handling import (
    ErrorCategory,
    ErrorSeverity,
    ErrorContext,
    ErrorAggregator,
    Outcome,
    get_error_aggregator,
    determine_severity,
    handle_error,
    safe_execute,
)

__all__ = [
    'ErrorCategory',
    'ErrorSeverity',
    'ErrorContext',
    'ErrorAggregator',
    'Outcome',
    'get_error_aggregator',
    'determine_severity',
    'handle_error',
    'safe_execute',
]

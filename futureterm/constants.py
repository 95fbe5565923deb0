"""
Centralized Constants Module for Future Terminal.

This module consolidates the timing, capacity and layout values used by
the event loop, the widgets and the renderer so that the pacing rules live
in one place.

Usage:
    from futureterm.constants import Timing, Limits, Speed

    handler = EventHandler(source, tick_interval=Timing.TICK_INTERVAL_MS / 1000)
    history = BoundedHistory(Limits.CPU_HISTORY)
"""

import os
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)


# =============================================================================
# ENVIRONMENT VARIABLE OVERRIDE UTILITIES
# =============================================================================

T = TypeVar('T')

ENV_PREFIX = "FUTURETERM_"


def _env_override(
    env_var: str,
    default: T,
    converter: Callable[[str], T] = str,
    validator: Optional[Callable[[T], bool]] = None,
    min_value: Optional[T] = None,
    max_value: Optional[T] = None,
) -> T:
    """Get a configuration value with environment variable override.

    Args:
        env_var: Environment variable name (will be prefixed with FUTURETERM_)
        default: Default value if env var not set
        converter: Function to convert string to target type
        validator: Optional validation function
        min_value: Optional minimum allowed value
        max_value: Optional maximum allowed value

    Returns:
        Configured value (from env var if valid, otherwise default)
    """
    full_env_var = f"{ENV_PREFIX}{env_var}"
    env_value = os.environ.get(full_env_var)

    if env_value is None:
        return default

    try:
        converted = converter(env_value)

        if min_value is not None and converted < min_value:
            logger.warning(
                f"{full_env_var}={env_value} below minimum {min_value}, using default"
            )
            return default
        if max_value is not None and converted > max_value:
            logger.warning(
                f"{full_env_var}={env_value} above maximum {max_value}, using default"
            )
            return default

        if validator is not None and not validator(converted):
            logger.warning(f"{full_env_var}={env_value} failed validation, using default")
            return default

        logger.info(f"Using {full_env_var}={converted} (override)")
        return converted

    except (ValueError, TypeError) as e:
        logger.warning(f"Invalid value for {full_env_var}: {e}, using default")
        return default


# =============================================================================
# TIMING CONSTANTS
# =============================================================================

@dataclass(frozen=True)
class Timing:
    """
    Tick cadence and the periods widgets pace themselves by.

    Every period is expressed in ticks, never in wall-clock time, so a
    slow frame delays animation but never skips a state transition.
    """
    TICK_INTERVAL_MS: int = 16          # ~60 ticks per second
    TICKS_PER_SECOND: int = 60          # Stats sampling and countdown period

    COUNTDOWN_FLASH_PERIOD: int = 15    # Countdown blink toggle
    CLOCK_BLINK_PERIOD: int = 30        # Clock separator blink
    SOURCE_SCROLL_PERIOD: int = 15      # Source scroller advance
    HEX_APPEND_PERIOD: int = 10         # New hex line
    HEX_HIGHLIGHT_PERIOD: int = 5       # Highlight re-roll
    PROGRESS_COMPLETE_HOLD: int = 30    # Ticks a finished bar flashes
    INPUT_POLL_SLICE_MS: int = 4        # Sleep between non-blocking key reads

    LOG_DELAY_MIN: int = 10             # Next log emission, inclusive
    LOG_DELAY_MAX: int = 60             # Next log emission, exclusive


# =============================================================================
# CAPACITY CONSTANTS
# =============================================================================

@dataclass(frozen=True)
class Limits:
    """Bounded-buffer capacities and graph ceilings."""
    CPU_HISTORY: int = 60
    MEMORY_HISTORY: int = 60
    NETWORK_HISTORY: int = 30

    MAX_LOG_ENTRIES: int = 100
    SEED_LOG_ENTRIES: int = 5

    MAX_HEX_LINES: int = 100
    SEED_HEX_LINES: int = 20
    HEX_BYTES_PER_LINE: int = 16
    HEX_VISIBLE_LINES: int = 10
    HEX_BASE_OFFSET: int = 0x7F3A0000

    MAP_CONNECTION_SOFT_CAP: int = 15   # No additions at or above this
    MAP_CONNECTION_PRUNE_CAP: int = 12  # Prune finished links above this

    RAIN_COLUMN_SPACING: int = 2        # One drop slot per 2 columns


# =============================================================================
# ANIMATION SPEED CONSTANTS
# =============================================================================

@dataclass(frozen=True)
class Speed:
    """Bounds for the user-adjustable animation speed multiplier."""
    DEFAULT: float = 1.0
    MIN: float = 0.25
    MAX: float = 3.0
    STEP: float = 0.25


# =============================================================================
# LAYOUT CONSTANTS
# =============================================================================

@dataclass(frozen=True)
class Layout:
    """Terminal geometry the renderer relies on."""
    MIN_WIDTH: int = 80
    MIN_HEIGHT: int = 24
    DEFAULT_WIDTH: int = 80
    DEFAULT_HEIGHT: int = 24
    HEADER_HEIGHT: int = 5
    FOOTER_HEIGHT: int = 10


# =============================================================================
# RUNTIME DEFAULTS (environment overridable)
# =============================================================================

DEFAULT_COUNTDOWN_SECONDS = 300

TICK_INTERVAL_MS = _env_override(
    'TICK_MS', Timing.TICK_INTERVAL_MS, int, min_value=1, max_value=1000,
)

COUNTDOWN_SECONDS = _env_override(
    'COUNTDOWN', DEFAULT_COUNTDOWN_SECONDS, int, min_value=1, max_value=359999,
)


__all__ = [
    'Timing',
    'Limits',
    'Speed',
    'Layout',
    'DEFAULT_COUNTDOWN_SECONDS',
    'TICK_INTERVAL_MS',
    'COUNTDOWN_SECONDS',
]

"""Timing of Gmail API calls, logged at DEBUG level."""

import logging
import time
from functools import wraps

logger = logging.getLogger(__name__)


def time_api_call(func):
    """Log how long each call to ``func`` takes, whether it returns or raises."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug(f"gmail {func.__name__}: {elapsed_ms:.1f} ms")
    return wrapper

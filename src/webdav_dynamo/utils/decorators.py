"""Decorator utilities for cross-cutting concerns."""
import time
import logging
import functools
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

def log_execution_time(func: F) -> F:
    """Decorator to log how long a store round trip took.

    The first positional argument after ``self`` is taken as the table name
    when it is a string, so log lines can be grouped per table.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that logs execution time
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        table = args[1] if len(args) > 1 and isinstance(args[1], str) else None
        label = f"{func.__name__}[{table}]" if table else func.__name__
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            duration = time.time() - start_time
            logger.debug(f"{label} completed in {duration * 1000:.1f}ms")
            return result
        except Exception as e:
            duration = time.time() - start_time
            logger.error(f"{label} failed after {duration * 1000:.1f}ms: {str(e)}")
            raise
    return cast(F, wrapper)

"""
Logging utilities for Fluency-Crew tools.

Provides a decorator that records each tool call in the active logging
session: parameters, execution time and a result summary.
"""

import functools
import time
from typing import Any, Callable, TypeVar

from ..logging.manager import LoggingManager

F = TypeVar("F", bound=Callable[..., Any])


def log_tool_execution(tool_name: str) -> Callable[[F], F]:
    """Decorator to log tool execution with parameters and results.

    Without an active logging session the tool runs unlogged.

    Args:
        tool_name: Name of the tool for logging purposes

    Returns:
        Decorated function with logging
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                logger = LoggingManager.get_instance().get_tool_logger(tool_name)
            except RuntimeError:
                return func(*args, **kwargs)

            logger.info(f"[TOOL_START] {tool_name}")
            logger.info(
                f"Parameters - Args: {_sanitize_for_logging(list(args))}, "
                f"Kwargs: {_sanitize_for_logging(kwargs)}"
            )
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"[TOOL_ERROR] {tool_name} failed: {e}")
                raise

            execution_time = time.time() - start_time
            logger.info(
                f"[TOOL_COMPLETE] {tool_name} - Execution time: {execution_time:.3f}s"
            )
            logger.info(f"Result summary: {_summarize_result(result)}")
            return result

        return wrapper  # type: ignore

    return decorator


def _summarize_result(result: Any) -> Any:
    """Summarize a tool result without dumping whole reports."""
    if isinstance(result, dict):
        summary = {}
        for key, value in result.items():
            if isinstance(value, (list, dict)) and len(str(value)) > 200:
                summary[key] = f"{type(value).__name__} with {len(value)} items"
            else:
                summary[key] = _sanitize_for_logging(value, max_length=100)
        return summary

    result_str = str(result)
    if len(result_str) > 200:
        return f"{result_str[:200]}... (truncated)"
    return result_str


def _sanitize_for_logging(obj: Any, max_length: int = 200) -> Any:
    """Sanitize object for logging by truncating long strings.

    Args:
        obj: Object to sanitize
        max_length: Maximum string length before truncation

    Returns:
        Sanitized object
    """
    if isinstance(obj, str):
        if len(obj) > max_length:
            return f"{obj[:max_length]}... (truncated, total length: {len(obj)})"
        return obj
    elif isinstance(obj, dict):
        return {
            key: _sanitize_for_logging(value, max_length) for key, value in obj.items()
        }
    elif isinstance(obj, (list, tuple)):
        return [_sanitize_for_logging(item, max_length) for item in obj]
    else:
        return obj

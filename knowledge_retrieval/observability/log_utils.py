"""
Logging utilities for safe structured logging.

Query strings, vectors and document bags can be large; these helpers keep
log records short and never let formatting errors escape into callers.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Safely convert any value to a short string for logging.

    Vectors and lists are summarised by length rather than printed.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context appended as key=value pairs.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    if not logger.isEnabledFor(level):
        return
    rendered = " ".join(f"{key}={safe_log_value(val)}" for key, val in context.items())
    logger.log(level, f"{message} | {rendered}" if rendered else message)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with its type, message and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context pairs
    """
    context.update({
        "error_type": type(exc).__name__,
        "error_msg": str(exc),
    })
    rendered = " ".join(f"{key}={safe_log_value(val)}" for key, val in context.items())
    logger.error(f"{message} | {rendered}", exc_info=exc)

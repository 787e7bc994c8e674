"""Standardized error logging helpers for Split Diff.

Failures at the edges of the app (file loading, widget updates, file
watching) are caught where they happen and reported through these helpers
so every message carries the same shape and prefix.
"""

from typing import Any, Optional

from .logger import log


def log_file_error(file_path: str, operation: str, exception: Exception) -> None:
    """Log file operation errors with consistent formatting.

    Args:
        file_path: Path to the file that caused the error
        operation: Description of the operation (e.g., "reading", "watching")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[IO] Failed {operation} {file_path}: {error_type}: {exception}")


def log_validation_error(field: str, value: Any, exception: Exception) -> None:
    """Log validation errors with consistent formatting.

    Args:
        field: Name of the field being validated
        value: The value that failed validation
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.warning(f"[VALIDATION] Failed validating {field}='{value}': {error_type}: {exception}")


def log_ui_error(component: str, action: str, exception: Exception) -> None:
    """Log UI component errors with consistent formatting.

    Args:
        component: Name of the UI component (e.g., "diff table", "left pane")
        action: The action being performed (e.g., "moving cursor", "updating")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[UI] Failed {action} on {component}: {error_type}: {exception}")


def log_watchdog_error(path: str, operation: str, exception: Exception) -> None:
    """Log file watching errors with consistent formatting.

    Args:
        path: Path being watched
        operation: The operation being performed (e.g., "starting observer")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[WATCHDOG] Failed {operation} for {path}: {error_type}: {exception}")


def log_generic_error(context: str, operation: str, exception: Exception, prefix: Optional[str] = None) -> None:
    """Log errors that don't fit the categories above.

    Args:
        context: Context where the error occurred (e.g., "recompute scheduler")
        operation: The operation being performed
        exception: The exception that was raised
        prefix: Optional log prefix for categorization
    """
    error_type = type(exception).__name__
    prefix_str = f"[{prefix}] " if prefix else ""
    log.error(f"{prefix_str}Error in {context} during {operation}: {error_type}: {exception}")

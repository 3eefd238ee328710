"""
Controller context logger.

Provides logging interface for the controller context with automatic [control] prefix.
All controller modules should import from this module, not from utils.logger directly.
"""

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

CONTEXT_PREFIX = "[control]"


# Wrapper functions with automatic [control] prefix


def _log_info(message: str) -> None:
    """Log info message with [control] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [control] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [control] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level controller-specific logging helpers


def log_render_start(controller_name: str, format_id: str, option_names) -> None:
    """Log the start of a render with the effective option names."""
    _log_debug(f"{controller_name}: rendering as {format_id!r}")
    _log_debug(f"  Options: {', '.join(sorted(option_names)) or '(none)'}")


def log_hook(controller_name: str, hook_name: str, invoked: bool) -> None:
    """Log a presence-checked hook dispatch."""
    if invoked:
        _log_debug(f"{controller_name}: {hook_name}")
    else:
        _log_debug(f"{controller_name}: {hook_name} (not implemented, skipped)")


def log_render_complete(controller_name: str, format_id: str, file_path=None) -> None:
    """Log successful completion of a render."""
    _log_debug(f"{controller_name}: rendered {format_id!r}")
    if file_path:
        _log_info(f"Output appended to: {file_path}")


def log_render_failure(controller_name: str, format_id: str, error: Exception) -> None:
    """Log a render that aborted. The exception itself is re-raised by the caller."""
    _log_error(f"{controller_name}: rendering {format_id!r} failed: {type(error).__name__}: {error}")

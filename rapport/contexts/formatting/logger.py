"""
Formatting context logger.

Provides logging interface for the formatting context with automatic [format] prefix.
All formatting modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from rapport.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[format]"


def setup_formatting_logger(log_dir: Path, console_level: str = "INFO") -> Path:
    """
    Setup logger for the formatting context.

    Configures loguru with provenance tracking and formatting-specific context.

    Args:
        log_dir: Directory for this rendering session
        console_level: Minimum level shown on the console

    Returns:
        Path to log file

    Example:
        from rapport.contexts.formatting.logger import setup_formatting_logger

        log_file = setup_formatting_logger(log_dir)
    """
    return _setup_logger(
        context_name="format",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": os.getenv("LATEX_COMPILER", "xelatex")},
        console_level=console_level,
    )


# Wrapper functions with automatic [format] prefix


def _log_info(message: str) -> None:
    """Log info message with [format] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [format] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [format] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [format] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [format] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level PDF compilation logging helpers


def log_compilation_start(tex_file: Path, num_passes: int, working_dir: Path) -> None:
    """Log start of compilation with context."""
    _log_debug(f"Compiling {tex_file.name} in {working_dir}")
    _log_debug(f"  Passes: {num_passes}")


def log_compilation_result(
    result,  # CompilationResult
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        result: CompilationResult from compile_latex()
        elapsed_time: Time taken to compile
        verbose: Show detailed warnings/errors (default: False)
    """
    if result.success:
        _log_success(f"PDF compiled: {len(result.warnings)} warnings ({elapsed_time:.2f}s)")
        if result.page_count is not None:
            _log_debug(f"  Pages: {result.page_count}")
    else:
        _log_error(f"PDF compilation failed: {len(result.errors)} errors ({elapsed_time:.2f}s)")
        error_limit = 10 if verbose else 5
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")

    # Log warnings at debug level (can be verbose)
    if result.warnings:
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    # Use opt(raw=True) to bypass the format template for multi-line compiler output
    if verbose or not result.success:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nLATEX STDOUT:\n{'=' * 80}\n{result.stdout}\n"
            )

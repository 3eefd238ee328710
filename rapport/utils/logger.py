"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<white>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict] = None,
    level_colors: Optional[Dict] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Configure loguru for a context with provenance tracking.

    Sets up dual output (file + stderr console) and logs execution provenance
    (script, command, working directory, Python version, etc.).

    Args:
        context_name: Context identifier (e.g., "control", "format", "cli")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console_level: Minimum level shown on the console

    Returns:
        Path to log file

    Example:
        from rapport.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="cli",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Format": "pdf"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # Remove default logger
    logger.remove()

    # Apply level colors (defaults + overrides)
    colors = {**LEVEL_COLORS, **(level_colors or {})}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    # Add file handler - captures everything (DEBUG level)
    logger.add(
        log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
    )

    # Console handler goes to stderr so rendered output on stdout stays clean
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=console_level,
        colorize=True,
    )

    # Log provenance header
    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict] = None) -> None:
    """
    Log execution provenance to current logger.

    Logs standard context (script, command, working directory, Python version)
    plus any additional context provided.

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)

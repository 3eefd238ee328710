"""
Shared utilities for RAPPORT.

Common functionality used across contexts:
- Logger configuration
"""

from rapport.utils.logger import log_provenance, setup_logger

__all__ = ["setup_logger", "log_provenance"]

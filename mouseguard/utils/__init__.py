"""
Utility functions for Mouse Guard.
"""

from .logger import setup_logging, get_log_dir

__all__ = ["setup_logging", "get_log_dir"]

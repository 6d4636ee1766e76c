"""
Utility functions and helpers for the Docker Registry UI application.

This package contains utility modules for logging and input validation
used throughout the application.
"""

from .logging import setup_logging, get_logger

__all__ = ["setup_logging", "get_logger"]

"""
Configuration package for Docker Registry UI.

This package provides centralized configuration management for the application,
including settings for registry storage, outbound registry calls and logging.
"""

from .settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings"]

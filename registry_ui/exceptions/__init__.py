"""
Custom exceptions for the Docker Registry UI application.

This module defines custom exception classes for different types of errors
that can occur in the application, providing better error handling and
more informative error messages.
"""

from .base import (
    RegistryUIError,
    ValidationError,
    NotFoundError,
    ConfigurationError,
    AuthenticationError,
    ExternalServiceError,
    FileOperationError,
)

__all__ = [
    "RegistryUIError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "AuthenticationError",
    "ExternalServiceError",
    "FileOperationError",
]

"""
Base exception classes for the Docker Registry UI application.

This module defines the base exception hierarchy and specific exception
classes for different types of errors that can occur in the application.
"""


class RegistryUIError(Exception):
    """
    Base exception class for all application-specific errors.

    This is the root exception class for all custom exceptions in the
    Docker Registry UI application. It provides a consistent interface
    for error handling and reporting.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(RegistryUIError):
    """
    Exception raised for validation errors.

    Raised when input data fails validation checks, such as a registry
    URL without a host or with an unsupported scheme.
    """
    pass


class NotFoundError(RegistryUIError):
    """
    Exception raised when a requested resource is not found.

    Raised for unknown registry ids and for repositories or manifests
    that a registry reports as missing.
    """
    pass


class ConfigurationError(RegistryUIError):
    """
    Exception raised for configuration-related errors.
    """
    pass


class AuthenticationError(RegistryUIError):
    """
    Exception raised when a registry rejects the supplied credentials.
    """

    def __init__(self, message: str, registry_url: str = None, details: dict = None):
        """
        Initialize the authentication exception.

        Args:
            message: Human-readable error message.
            registry_url: Base URL of the registry that answered 401.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message, details)
        self.registry_url = registry_url


class ExternalServiceError(RegistryUIError):
    """
    Exception raised when a call to a registry or README host fails.

    Covers connection failures, timeouts and unexpected HTTP statuses.
    """

    def __init__(self, message: str, service_name: str = None, status_code: int = None, details: dict = None):
        """
        Initialize the external service exception.

        Args:
            message: Human-readable error message.
            service_name: Name or URL of the external service.
            status_code: HTTP status code if the service answered.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message, details)
        self.service_name = service_name
        self.status_code = status_code


class FileOperationError(RegistryUIError):
    """
    Exception raised for file operation errors.

    This exception is raised when the registry file cannot be read,
    parsed or written.
    """

    def __init__(self, message: str, file_path: str = None, operation: str = None, details: dict = None):
        """
        Initialize the file operation exception.

        Args:
            message: Human-readable error message.
            file_path: Path to the file that caused the error.
            operation: The operation that failed (read, write).
            details: Optional dictionary with additional error details.
        """
        super().__init__(message, details)
        self.file_path = file_path
        self.operation = operation

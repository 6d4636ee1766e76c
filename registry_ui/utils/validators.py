"""
Input validation utilities for the Docker Registry UI application.

This module provides reusable validation functions for API endpoints
and service layers to ensure data integrity.
"""

import re
from typing import Optional
from urllib.parse import urlparse

from registry_ui.exceptions import ValidationError


ALLOWED_SCHEMES = ("http", "https")

# Repository path components as accepted by the distribution spec
_REPOSITORY_NAME_PATTERN = re.compile(
    r'^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*(?:/[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*)*$'
)


def normalize_registry_url(url: str) -> str:
    """
    Normalize a user supplied registry address into a base URL.

    A missing scheme defaults to https. Trailing slashes are removed so
    that paths can be appended with a single "/". A trailing "/v2" API
    root is dropped as well.

    Args:
        url: Registry address as typed by the user

    Returns:
        Base URL such as "https://registry.example:5000"

    Raises:
        ValidationError: If the address has no host, an unsupported scheme,
            a query string or a fragment
    """
    if not url or not isinstance(url, str):
        raise ValidationError("Registry URL must be a non-empty string")

    candidate = url.strip()
    if not candidate:
        raise ValidationError("Registry URL must be a non-empty string")

    if "://" not in candidate:
        candidate = f"https://{candidate}"

    try:
        parsed = urlparse(candidate)
        # Accessing port validates it
        parsed.port
    except ValueError as e:
        raise ValidationError(f"Invalid registry URL: {url}", details={'url': url}) from e

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValidationError(
            f"Unsupported URL scheme '{parsed.scheme}'",
            details={'url': url, 'allowed_schemes': list(ALLOWED_SCHEMES)}
        )

    if not parsed.hostname:
        raise ValidationError(f"Registry URL has no host: {url}", details={'url': url})

    if parsed.query or parsed.fragment:
        raise ValidationError(
            "Registry URL must not contain a query string or fragment",
            details={'url': url}
        )

    if any(c.isspace() for c in candidate):
        raise ValidationError("Registry URL must not contain whitespace", details={'url': url})

    path = parsed.path.rstrip("/")
    if path.endswith("/v2"):
        path = path[:-len("/v2")].rstrip("/")
    return f"{parsed.scheme.lower()}://{parsed.netloc}{path}"


def registry_api_url(base_url: str) -> str:
    """Return the Docker Registry HTTP API v2 root for a base URL."""
    return f"{base_url}/v2"


def registry_host(base_url: str) -> str:
    """
    Return the host part of a registry URL as used in image references.

    "https://registry.example:5000" becomes "registry.example:5000".
    """
    parsed = urlparse(base_url)
    return f"{parsed.netloc}{parsed.path.rstrip('/')}"


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the credential part of an Authorization header value.

    "Basic dXNlcjpwYXNz" yields "dXNlcjpwYXNz". A value without a scheme
    is returned whole.

    Args:
        authorization: Raw header value or None

    Returns:
        The token, or None if no usable header was supplied
    """
    if authorization is None:
        return None

    # Partition before stripping so a bare "Basic " keeps its separator
    _, sep, token = authorization.lstrip().partition(" ")
    if not sep:
        return authorization.strip() or None
    return token.strip() or None


def validate_repository_name(name: str) -> str:
    """
    Validate a repository name such as "library/nginx".

    Args:
        name: Repository name to validate

    Returns:
        The stripped repository name

    Raises:
        ValidationError: If the name does not follow the registry naming rules
    """
    if not isinstance(name, str):
        raise ValidationError("Repository name must be a string")

    name = name.strip().strip("/")

    if not name:
        raise ValidationError("Repository name cannot be empty")

    if not _REPOSITORY_NAME_PATTERN.match(name):
        raise ValidationError(
            f"Invalid repository name: {name}",
            details={'name': name}
        )

    return name

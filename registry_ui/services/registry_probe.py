"""
Reachability and credential check for a candidate registry.

A probe is one GET against the registry API root. It is never retried:
registering a registry is an interactive action and the user resubmits.
"""

import socket
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from registry_ui.utils.logging import LoggerMixin, get_logger, log_execution_time

logger = get_logger(__name__)

# Resolver messages for hosts that do not exist, across platforms
_NAME_RESOLUTION_MARKERS = (
    "name or service not known",
    "nodename nor servname provided",
    "no address associated with hostname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "name does not resolve",
)


class ProbeOutcome(str, Enum):
    REACHABLE = "reachable"
    UNAUTHORIZED = "unauthorized"
    INVALID_URL = "invalid_url"
    OTHER_FAILURE = "other_failure"


@dataclass
class ProbeResult:
    outcome: ProbeOutcome
    status_code: Optional[int] = None
    detail: Optional[str] = None


def is_name_resolution_error(exc: BaseException) -> bool:
    """Return True if ``exc`` or anything in its cause chain is a DNS failure."""
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        message = str(current).lower()
        if any(marker in message for marker in _NAME_RESOLUTION_MARKERS):
            return True
        current = current.__cause__ or current.__context__
    return False


class RegistryProbe(LoggerMixin):
    """Issues the validation request for POST /api/registry."""

    def __init__(self, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    @log_execution_time(logger)
    async def probe(self, url: str, credential: Optional[str] = None) -> ProbeResult:
        """
        GET ``url + "/"`` once and classify the answer.

        Args:
            url: Registry API URL without trailing slash.
            credential: Full Authorization header value, e.g. "Basic dXNlcjpwYXNz".

        Returns:
            ProbeResult: REACHABLE for 2xx, UNAUTHORIZED for 401, INVALID_URL
            when the host does not resolve, OTHER_FAILURE for everything else.
        """
        headers = {}
        if credential:
            headers["authorization"] = credential

        target = url + "/"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(target, headers=headers)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            self.logger.info(f"Probe rejected URL {target}: {e}")
            return ProbeResult(ProbeOutcome.INVALID_URL, detail=str(e))
        except httpx.ConnectError as e:
            if is_name_resolution_error(e):
                self.logger.info(f"Probe could not resolve host of {target}")
                return ProbeResult(ProbeOutcome.INVALID_URL, detail=str(e))
            self.logger.warning(f"Probe could not connect to {target}: {e}")
            return ProbeResult(ProbeOutcome.OTHER_FAILURE, detail=str(e))
        except httpx.TimeoutException as e:
            self.logger.warning(f"Probe to {target} timed out after {self.timeout}s")
            return ProbeResult(ProbeOutcome.OTHER_FAILURE, detail=f"timed out: {e}")
        except httpx.HTTPError as e:
            self.logger.warning(f"Probe to {target} failed: {e}")
            return ProbeResult(ProbeOutcome.OTHER_FAILURE, detail=str(e))

        if response.is_success:
            return ProbeResult(ProbeOutcome.REACHABLE, status_code=response.status_code)
        if response.status_code == 401:
            return ProbeResult(ProbeOutcome.UNAUTHORIZED, status_code=401)

        self.logger.warning(f"Probe to {target} answered with unexpected status {response.status_code}")
        return ProbeResult(
            ProbeOutcome.OTHER_FAILURE,
            status_code=response.status_code,
            detail=f"unexpected status {response.status_code}"
        )

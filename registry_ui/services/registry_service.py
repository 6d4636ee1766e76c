"""
Registry registration service.

Validates a candidate registry with a probe and stores it on success.
Anticipated rejections are returned as ApiResult envelopes; anything else
is raised to the API layer.
"""

from typing import List, Optional

from fastapi.concurrency import run_in_threadpool

from registry_ui.exceptions import ExternalServiceError, ValidationError
from registry_ui.schemas.registry import ApiResult, Registry, RegistryEntry
from registry_ui.services.registry_probe import ProbeOutcome, RegistryProbe
from registry_ui.services.registry_store import RegistryStore
from registry_ui.utils.logging import LoggerMixin
from registry_ui.utils.validators import extract_token, normalize_registry_url, registry_api_url

SUCCESS_MESSAGE = "success"
UNAUTHORIZED_MESSAGE = "You do not have access rights. \nPlease check your username and password."
INVALID_URL_MESSAGE = "Invalid url. \nPlease check the url."
NOT_FOUND_MESSAGE = "Registry not found"


def success(data) -> ApiResult:
    return ApiResult(status=200, message=SUCCESS_MESSAGE, data=data)


def rejected(status: int, message: str) -> ApiResult:
    return ApiResult(status=status, message=message, data={})


class RegistryService(LoggerMixin):
    def __init__(self, store: RegistryStore, probe: RegistryProbe):
        self.store = store
        self.probe = probe

    def list_registries(self) -> List[Registry]:
        return self.store.list()

    def get_registry(self, registry_id: int) -> Optional[Registry]:
        return self.store.get(registry_id)

    async def register(self, name: str, url: str, authorization: Optional[str] = None) -> ApiResult:
        """
        Validate and persist a new registry.

        Args:
            name: Display name.
            url: Registry address as entered by the user.
            authorization: Optional Authorization header to validate and keep.

        Returns:
            ApiResult: status 200 with the stored registry, 401 when the
            registry rejects the credentials, 400 when the URL is invalid.

        Raises:
            ExternalServiceError: If the registry could not be validated for
                any other reason.
            FileOperationError: If the registry could not be stored.
        """
        try:
            base_url = normalize_registry_url(url)
        except ValidationError as e:
            self.logger.info(f"Rejected registry '{name}': {e.message}")
            return rejected(400, INVALID_URL_MESSAGE)

        result = await self.probe.probe(registry_api_url(base_url), authorization)

        if result.outcome is ProbeOutcome.REACHABLE:
            entry = RegistryEntry(name=name, url=base_url, token=extract_token(authorization))
            registry = await run_in_threadpool(self.store.append, entry)
            return success(registry.model_dump(exclude_none=True))

        if result.outcome is ProbeOutcome.UNAUTHORIZED:
            self.logger.info(f"Registry {base_url} rejected the supplied credentials")
            return rejected(401, UNAUTHORIZED_MESSAGE)

        if result.outcome is ProbeOutcome.INVALID_URL:
            self.logger.info(f"Registry {base_url} could not be resolved")
            return rejected(400, INVALID_URL_MESSAGE)

        raise ExternalServiceError(
            f"Registry validation failed: {result.detail}",
            service_name=base_url,
            status_code=result.status_code
        )

"""
API routes for browsing the images of a stored registry.

Every route answers with an ApiResult envelope. Unknown registries or
repositories, rejected credentials and invalid names are reported in the
body; an unreachable registry surfaces as 502 through the application's
error handlers.
"""

from typing import Optional

import httpx
from fastapi import APIRouter, Depends

from registry_ui.api.dependencies import get_http_transport, get_registry_store
from registry_ui.config import Settings, get_settings
from registry_ui.exceptions import AuthenticationError, NotFoundError, ValidationError
from registry_ui.services.registry_client import DockerRegistryClient
from registry_ui.services.registry_service import (
    NOT_FOUND_MESSAGE, UNAUTHORIZED_MESSAGE, rejected, success
)
from registry_ui.services.registry_store import RegistryStore
from registry_ui.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["images"])


def get_registry_client(
    registry_id: int,
    store: RegistryStore = Depends(get_registry_store),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
    settings: Settings = Depends(get_settings)
) -> Optional[DockerRegistryClient]:
    registry = store.get(registry_id)
    if registry is None:
        return None
    return DockerRegistryClient(
        registry,
        timeout=settings.registry_client.timeout_seconds,
        page_size=settings.registry_client.catalog_page_size,
        transport=transport
    )


def _dump(data):
    if isinstance(data, list):
        return [item.model_dump(by_alias=True, exclude_none=True) for item in data]
    return data.model_dump(by_alias=True, exclude_none=True)


async def _envelope(client: Optional[DockerRegistryClient], call):
    if client is None:
        return rejected(404, NOT_FOUND_MESSAGE).model_dump()
    try:
        data = await call(client)
    except AuthenticationError:
        logger.info(f"Registry {client.registry.url} rejected the stored credentials")
        return rejected(401, UNAUTHORIZED_MESSAGE).model_dump()
    except NotFoundError as e:
        return rejected(404, e.message).model_dump()
    except ValidationError as e:
        return rejected(400, e.message).model_dump()
    return success(_dump(data)).model_dump()


@router.get("/images/{registry_id}")
async def read_images(client: Optional[DockerRegistryClient] = Depends(get_registry_client)):
    return await _envelope(client, lambda c: c.list_images())


@router.get("/image/{registry_id}/{name:path}")
async def read_image(name: str, client: Optional[DockerRegistryClient] = Depends(get_registry_client)):
    return await _envelope(client, lambda c: c.get_image(name))


@router.get("/tags/{registry_id}/{name:path}")
async def read_tags(name: str, client: Optional[DockerRegistryClient] = Depends(get_registry_client)):
    return await _envelope(client, lambda c: c.list_tags(name))

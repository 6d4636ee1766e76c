from fastapi import APIRouter, Depends, Header
from typing import List, Optional

from registry_ui.api.dependencies import get_registry_service
from registry_ui.schemas.registry import Registry, RegistryCreate
from registry_ui.services.registry_service import NOT_FOUND_MESSAGE, RegistryService, rejected, success

router = APIRouter(prefix="/api/registry", tags=["registry"])


@router.get("", response_model=List[Registry], response_model_exclude_none=True)
def read_all_registries(service: RegistryService = Depends(get_registry_service)):
    return service.list_registries()


@router.post("")
async def create_new_registry(
    registry: RegistryCreate,
    authorization: Optional[str] = Header(None),
    service: RegistryService = Depends(get_registry_service)
):
    """
    Validate a registry against its API root and store it.

    Rejections (bad credentials, invalid URL) are reported in the body
    with transport status 200.
    """
    result = await service.register(registry.name, registry.url, authorization)
    return result.model_dump()


@router.get("/{registry_id}")
def read_registry(registry_id: int, service: RegistryService = Depends(get_registry_service)):
    registry = service.get_registry(registry_id)
    if registry is None:
        return rejected(404, NOT_FOUND_MESSAGE).model_dump()
    return success(registry.model_dump(exclude_none=True)).model_dump()

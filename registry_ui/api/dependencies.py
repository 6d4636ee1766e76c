"""FastAPI dependencies shared by the API and view routes."""

from typing import Optional

import httpx
from fastapi import Depends

from registry_ui.config import Settings, get_settings
from registry_ui.services.registry_probe import RegistryProbe
from registry_ui.services.registry_service import RegistryService
from registry_ui.services.registry_store import RegistryStore


def get_registry_store(settings: Settings = Depends(get_settings)) -> RegistryStore:
    return RegistryStore(settings.storage.registry_file)


def get_http_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound registry and README calls; None uses the network."""
    return None


def get_registry_service(
    store: RegistryStore = Depends(get_registry_store),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
    settings: Settings = Depends(get_settings)
) -> RegistryService:
    probe = RegistryProbe(timeout=settings.probe.timeout_seconds, transport=transport)
    return RegistryService(store, probe)

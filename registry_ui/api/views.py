"""
Server-rendered pages.

Pages read their data through the application's own JSON API, the same
surface a browser client would use, by sending requests to the running
app over an in-process ASGI transport.
"""

from pathlib import Path
from typing import Any, Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from registry_ui.api.dependencies import get_http_transport
from registry_ui.config import Settings, get_settings
from registry_ui.services.readme import fetch_readme, render_readme
from registry_ui.services.registry_client import newest_tag
from registry_ui.schemas.image import Tag
from registry_ui.utils.logging import get_logger
from registry_ui.utils.validators import registry_host

logger = get_logger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def _api_client(request: Request) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=request.app),
        base_url="http://registry-ui"
    )


async def _api_data(client: httpx.AsyncClient, path: str) -> Optional[Any]:
    """GET an enveloped API route and return its data when status is 200."""
    try:
        response = await client.get(path)
        response.raise_for_status()
        body = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"API call {path} failed: {e}")
        return None
    if body.get("status") != 200:
        logger.info(f"API call {path} answered {body.get('status')}: {body.get('message')}")
        return None
    return body.get("data")


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, q: Optional[str] = None):
    """Serve the endpoint list"""
    registries = []
    async with _api_client(request) as client:
        try:
            response = await client.get("/api/registry")
            response.raise_for_status()
            registries = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Could not load registries: {e}")

    if q:
        needle = q.strip().lower()
        registries = [
            r for r in registries
            if needle in r.get("name", "").lower() or needle in r.get("url", "").lower()
        ]

    return templates.TemplateResponse(request, "index.html", {"registries": registries, "q": q or ""})


@router.get("/images/{registry_id}", response_class=HTMLResponse)
async def images_page(request: Request, registry_id: int):
    """Serve the image list of a registry"""
    async with _api_client(request) as client:
        registry = await _api_data(client, f"/api/registry/{registry_id}")
        if registry is None:
            return RedirectResponse("/", status_code=303)
        images = await _api_data(client, f"/api/images/{registry_id}")

    return templates.TemplateResponse(request, "images.html", {
        "registry": registry,
        "images": images,
    })


@router.get("/image/{registry_id}/{name:path}", response_class=HTMLResponse)
async def image_page(
    request: Request,
    registry_id: int,
    name: str,
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
    settings: Settings = Depends(get_settings)
):
    """Serve the image detail page with pull command and README"""
    async with _api_client(request) as client:
        registry = await _api_data(client, f"/api/registry/{registry_id}")
        image = await _api_data(client, f"/api/image/{registry_id}/{name}")
        tags = await _api_data(client, f"/api/tags/{registry_id}/{name}")

    if registry is None or image is None or tags is None:
        return RedirectResponse("/", status_code=303)

    pull_command = None
    tag = newest_tag([Tag(**t) for t in tags])
    if tag is not None:
        pull_command = f"docker pull {registry_host(registry['url'])}/{image['name']}:{tag.name}"

    readme = await fetch_readme(
        image.get("sourceRepositoryUrl"),
        timeout=settings.registry_client.readme_timeout_seconds,
        transport=transport
    )

    return templates.TemplateResponse(request, "image.html", {
        "registry": registry,
        "image": image,
        "pull_command": pull_command,
        "readme_html": render_readme(readme) if readme else None,
    })


@router.get("/tags/{registry_id}/{name:path}", response_class=HTMLResponse)
async def tags_page(request: Request, registry_id: int, name: str):
    """Serve the tag list of an image"""
    async with _api_client(request) as client:
        registry = await _api_data(client, f"/api/registry/{registry_id}")
        tags = await _api_data(client, f"/api/tags/{registry_id}/{name}")

    if registry is None or tags is None:
        return RedirectResponse("/", status_code=303)

    names = sorted((t["name"] for t in tags), reverse=True)
    return templates.TemplateResponse(request, "tags.html", {
        "registry": registry,
        "image_name": name,
        "tags": names,
        "host": registry_host(registry["url"]),
    })

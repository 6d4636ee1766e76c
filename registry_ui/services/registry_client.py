"""
Client for the Docker Registry HTTP API v2.

Reads the catalog, tag lists, manifests and image configuration of a
registered registry. Requests carry ``Authorization: Basic <token>`` when
the registry was stored with a token.
"""

import json
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import httpx

from registry_ui.exceptions import AuthenticationError, ExternalServiceError, NotFoundError
from registry_ui.schemas.image import Image, Tag
from registry_ui.schemas.registry import Registry
from registry_ui.utils.logging import LoggerMixin, get_logger, log_execution_time
from registry_ui.utils.validators import registry_api_url, validate_repository_name

logger = get_logger(__name__)

MANIFEST_MEDIA_TYPES = [
    "application/vnd.docker.distribution.manifest.v2+json",
    "application/vnd.docker.distribution.manifest.list.v2+json",
    "application/vnd.oci.image.manifest.v1+json",
    "application/vnd.oci.image.index.v1+json",
    "application/vnd.docker.distribution.manifest.v1+prettyjws",
    "application/vnd.docker.distribution.manifest.v1+json",
]

SOURCE_LABELS = (
    "org.opencontainers.image.source",
    "org.opencontainers.image.url",
)

_LINK_NEXT_PATTERN = re.compile(r'<([^>]+)>\s*;\s*rel="?next"?')


def parse_next_link(link_header: Optional[str]) -> Optional[str]:
    """Return the target of rel="next" in a Link header, if any."""
    if not link_header:
        return None
    match = _LINK_NEXT_PATTERN.search(link_header)
    return match.group(1) if match else None


def newest_tag(tags: List[Tag]) -> Optional[Tag]:
    """Pick the tag shown by default: the highest name."""
    if not tags:
        return None
    return max(tags, key=lambda t: t.name)


def _labels(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = config.get(key)
    labels = section.get("Labels") if isinstance(section, dict) else None
    return labels if isinstance(labels, dict) else {}


def source_url_from_config(config: Dict[str, Any]) -> Optional[str]:
    """Read the source repository URL from an image config's labels."""
    labels = _labels(config, "config")
    if not labels:
        # Schema 1 manifests keep the config under container_config
        labels = _labels(config, "container_config")
    for label in SOURCE_LABELS:
        value = labels.get(label)
        if isinstance(value, str) and value:
            return value
    return None


def _malformed(response: httpx.Response, message: str) -> ExternalServiceError:
    return ExternalServiceError(
        message,
        service_name=str(response.request.url),
        status_code=response.status_code
    )


def _string_list(response: httpx.Response, document: Dict[str, Any], key: str) -> List[str]:
    """Read a list of strings that the registry may also send as null."""
    values = document.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise _malformed(response, f"Registry returned a malformed '{key}' list")
    return values


class DockerRegistryClient(LoggerMixin):
    """Read-only client for one stored registry."""

    def __init__(
        self,
        registry: Registry,
        timeout: float = 10.0,
        page_size: int = 100,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.registry = registry
        self.api_url = registry_api_url(registry.url)
        self.timeout = timeout
        self.page_size = page_size
        self.transport = transport

    def _headers(self, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {}
        if self.registry.token:
            headers["Authorization"] = f"Basic {self.registry.token}"
        if accept:
            headers["Accept"] = accept
        return headers

    async def _get(self, client: httpx.AsyncClient, url: str, accept: Optional[str] = None) -> httpx.Response:
        try:
            response = await client.get(url, headers=self._headers(accept))
        except httpx.HTTPError as e:
            self.logger.warning(f"Request to {url} failed: {e}")
            raise ExternalServiceError(
                f"Registry request failed: {e}",
                service_name=self.registry.url
            ) from e

        if response.status_code == 401:
            raise AuthenticationError(
                "Registry rejected the stored credentials",
                registry_url=self.registry.url
            )
        if response.status_code == 404:
            raise NotFoundError(f"Not found: {url}", details={'url': url})
        if not response.is_success:
            self.logger.warning(f"Request to {url} answered with {response.status_code}")
            raise ExternalServiceError(
                f"Registry answered with status {response.status_code}",
                service_name=self.registry.url,
                status_code=response.status_code
            )
        return response

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, follow_redirects=True)

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            document = response.json()
        except ValueError as e:
            raise _malformed(response, "Registry returned invalid JSON") from e
        if not isinstance(document, dict):
            raise _malformed(response, "Registry returned a JSON document that is not an object")
        return document

    @log_execution_time(logger)
    async def list_images(self) -> List[Image]:
        """Return every repository of the registry, following catalog pagination."""
        names: List[str] = []
        url: Optional[str] = f"{self.api_url}/_catalog?n={self.page_size}"

        async with self._client() as client:
            while url:
                response = await self._get(client, url)
                names.extend(_string_list(response, self._json(response), "repositories"))
                next_link = parse_next_link(response.headers.get("link"))
                url = urljoin(url, next_link) if next_link else None

        return [Image(name=name) for name in sorted(set(names))]

    @log_execution_time(logger)
    async def list_tags(self, name: str) -> List[Tag]:
        """Return the tags of a repository as listed by the registry."""
        name = validate_repository_name(name)
        async with self._client() as client:
            response = await self._get(client, f"{self.api_url}/{name}/tags/list")
        tags = _string_list(response, self._json(response), "tags")
        return [Tag(name=tag) for tag in tags]

    @log_execution_time(logger)
    async def get_image(self, name: str) -> Image:
        """
        Describe a repository.

        The source repository URL is read from the OCI labels of the image
        config behind the newest tag. Repositories without tags or labels
        yield an Image without a source URL.
        """
        name = validate_repository_name(name)
        tags = await self.list_tags(name)
        tag = newest_tag(tags)
        if tag is None:
            return Image(name=name)

        async with self._client() as client:
            config = await self._image_config(client, name, tag.name)

        return Image(name=name, source_repository_url=source_url_from_config(config) if config else None)

    async def _image_config(self, client: httpx.AsyncClient, name: str, reference: str) -> Optional[Dict[str, Any]]:
        accept = ", ".join(MANIFEST_MEDIA_TYPES)
        response = await self._get(client, f"{self.api_url}/{name}/manifests/{reference}", accept=accept)
        manifest = self._json(response)

        if "manifests" in manifest:
            # Image index: describe the first platform
            entries = manifest.get("manifests") or []
            if not entries:
                return None
            entry = entries[0] if isinstance(entries, list) else None
            digest = entry.get("digest") if isinstance(entry, dict) else None
            if not isinstance(digest, str) or not digest:
                raise _malformed(response, "Image index entry has no digest")
            response = await self._get(client, f"{self.api_url}/{name}/manifests/{digest}", accept=accept)
            manifest = self._json(response)

        if manifest.get("schemaVersion") == 1:
            history = manifest.get("history") or []
            if not history:
                return None
            first = history[0] if isinstance(history, list) else None
            raw_config = first.get("v1Compatibility") if isinstance(first, dict) else None
            try:
                config = json.loads(raw_config or "{}")
            except (TypeError, json.JSONDecodeError) as e:
                raise _malformed(response, "Schema 1 manifest has an unreadable v1Compatibility entry") from e
            if not isinstance(config, dict):
                raise _malformed(response, "Schema 1 manifest has an unreadable v1Compatibility entry")
            return config

        config_descriptor = manifest.get("config") or {}
        if not isinstance(config_descriptor, dict):
            raise _malformed(response, "Manifest config descriptor is not an object")
        digest = config_descriptor.get("digest")
        if not isinstance(digest, str) or not digest:
            return None
        response = await self._get(client, f"{self.api_url}/{name}/blobs/{digest}")
        return self._json(response)

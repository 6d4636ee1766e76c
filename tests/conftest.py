"""
Shared fixtures for the Docker Registry UI test suite.

Outbound registry traffic never leaves the process: a FakeRegistry answers
requests through ``httpx.MockTransport``, injected into the app by
overriding the ``get_http_transport`` dependency.
"""

import json
import socket
from typing import Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from registry_ui.api.dependencies import get_http_transport, get_registry_store
from registry_ui.main import app
from registry_ui.services.registry_store import RegistryStore


class FakeRegistry:
    """In-memory Docker registry reachable under any number of hosts."""

    def __init__(self):
        self.hosts: Dict[str, Dict] = {}
        self.unresolvable: set = set()
        self.requests: List[httpx.Request] = []
        self.readmes: Dict[str, str] = {}

    def add_host(
        self,
        host: str,
        credential: Optional[str] = None,
        root_status: int = 200,
        repositories: Optional[Dict[str, Dict]] = None
    ) -> None:
        """
        Register a registry host.

        Args:
            host: Host (and port) as it appears in URLs.
            credential: Authorization header value required, or None for anonymous access.
            root_status: Status returned by GET /v2/ for authorized requests.
            repositories: {name: {"tags": [...], "labels": {...}}}.
        """
        self.hosts[host] = {
            "credential": credential,
            "root_status": root_status,
            "repositories": repositories or {},
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.netloc.decode()

        if request.url.host in self.unresolvable:
            raise httpx.ConnectError(
                "[Errno -2] Name or service not known", request=request
            ) from socket.gaierror(-2, "Name or service not known")

        if request.url.host == "raw.githubusercontent.com":
            content = self.readmes.get(request.url.path)
            if content is None:
                return httpx.Response(404, text="404: Not Found")
            return httpx.Response(200, text=content)

        config = self.hosts.get(host)
        if config is None:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        if config["credential"] and request.headers.get("authorization") != config["credential"]:
            return httpx.Response(401, json={"errors": [{"code": "UNAUTHORIZED"}]})

        path = request.url.path
        if path == "/v2/":
            return httpx.Response(config["root_status"], json={})

        repositories = config["repositories"]
        if path == "/v2/_catalog":
            return httpx.Response(200, json={"repositories": sorted(repositories)})

        for name, repo in repositories.items():
            prefix = f"/v2/{name}/"
            if not path.startswith(prefix):
                continue
            rest = path[len(prefix):]
            if rest == "tags/list":
                return httpx.Response(200, json={"name": name, "tags": repo.get("tags")})
            if rest.startswith("manifests/"):
                return httpx.Response(200, json={
                    "schemaVersion": 2,
                    "mediaType": "application/vnd.oci.image.manifest.v1+json",
                    "config": {"digest": f"sha256:{name.replace('/', '-')}-config"},
                    "layers": [],
                })
            if rest.startswith("blobs/"):
                return httpx.Response(200, content=json.dumps({
                    "architecture": "amd64",
                    "config": {"Labels": repo.get("labels") or {}},
                }).encode())

        return httpx.Response(404, json={"errors": [{"code": "NAME_UNKNOWN"}]})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def registry_file(tmp_path):
    """Path of an empty registry file."""
    return tmp_path / "data" / "registry.json"


@pytest.fixture
def store(registry_file):
    return RegistryStore(registry_file)


@pytest.fixture
def fake_registry():
    return FakeRegistry()


@pytest.fixture
def client(store, fake_registry):
    """TestClient wired to the temporary store and the fake registry."""
    app.dependency_overrides[get_registry_store] = lambda: store
    app.dependency_overrides[get_http_transport] = lambda: fake_registry.transport
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

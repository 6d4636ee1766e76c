import unittest
import tempfile
from pathlib import Path

from fastapi.testclient import TestClient

from registry_ui.api.dependencies import get_registry_store
from registry_ui.main import app
from registry_ui.schemas.registry import RegistryEntry
from registry_ui.services.registry_store import RegistryStore


class TestApp(unittest.TestCase):
    def setUp(self):
        # Point the app at a throwaway registry file
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.store = RegistryStore(Path(self.tmp_dir.name) / "registry.json")
        app.dependency_overrides[get_registry_store] = lambda: self.store

        self.client = TestClient(app)

        self.registry = self.store.append(
            RegistryEntry(name="Test Registry", url="https://registry.example")
        )

    def tearDown(self):
        app.dependency_overrides.clear()
        self.tmp_dir.cleanup()

    def test_health_check(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_list_registries(self):
        response = self.client.get("/api/registry")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [
            {"id": self.registry.id, "name": "Test Registry", "url": "https://registry.example"}
        ])

    def test_home_page(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("Test Registry", response.text)

    def test_static_files(self):
        response = self.client.get("/static/style.css")
        self.assertEqual(response.status_code, 200)


if __name__ == "__main__":
    unittest.main()

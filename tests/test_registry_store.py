"""
Test suite for the file-backed registry store.

Covers id assignment, file format, atomic rewrites and concurrent appends.
"""

import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from registry_ui.exceptions import ConfigurationError, FileOperationError
from registry_ui.schemas.registry import RegistryEntry
from registry_ui.services.registry_store import RegistryStore


def entry(name: str, token: str = None) -> RegistryEntry:
    return RegistryEntry(name=name, url=f"https://{name}.example", token=token)


class TestRegistryStore:
    """Test cases for RegistryStore."""

    def test_load_missing_file_returns_empty_document(self, store):
        registry_file = store.load()
        assert registry_file.last_id == 0
        assert registry_file.registries == []

    def test_append_assigns_increasing_ids(self, store):
        ids = [store.append(entry(f"reg{i}")).id for i in range(5)]

        assert ids == [1, 2, 3, 4, 5]
        registry_file = store.load()
        assert registry_file.last_id == 5
        assert registry_file.last_id == max(r.id for r in registry_file.registries)

    def test_list_keeps_insertion_order(self, store):
        for name in ["zeta", "alpha", "mid"]:
            store.append(entry(name))

        assert [r.name for r in store.list()] == ["zeta", "alpha", "mid"]

    def test_file_is_pretty_printed_registry_document(self, store, registry_file):
        store.append(entry("anon"))
        store.append(entry("private", token="dXNlcjpwYXNz"))

        raw = registry_file.read_text(encoding="utf-8")
        assert '\n  "lastId": 2' in raw

        document = json.loads(raw)
        assert document == {
            "lastId": 2,
            "list": [
                {"id": 1, "name": "anon", "url": "https://anon.example"},
                {"id": 2, "name": "private", "url": "https://private.example", "token": "dXNlcjpwYXNz"},
            ],
        }

    def test_get_returns_registry_by_id(self, store):
        store.append(entry("first"))
        second = store.append(entry("second"))

        assert store.get(second.id) == second
        assert store.get(99) is None

    def test_ids_not_reused_when_last_id_is_stale(self, registry_file):
        registry_file.parent.mkdir(parents=True)
        registry_file.write_text(json.dumps({
            "lastId": 1,
            "list": [{"id": 7, "name": "edited", "url": "https://edited.example"}],
        }))

        registry = RegistryStore(registry_file).append(entry("next"))

        assert registry.id == 8

    def test_malformed_file_raises_file_operation_error(self, registry_file):
        registry_file.parent.mkdir(parents=True)
        registry_file.write_text("{not json")

        with pytest.raises(FileOperationError) as exc_info:
            RegistryStore(registry_file).load()

        assert exc_info.value.operation == "read"

    def test_wrong_shape_raises_file_operation_error(self, registry_file):
        registry_file.parent.mkdir(parents=True)
        registry_file.write_text(json.dumps({"lastId": "many", "list": "nope"}))

        with pytest.raises(FileOperationError):
            RegistryStore(registry_file).load()

    def test_append_leaves_no_temporary_files(self, store, registry_file):
        for i in range(3):
            store.append(entry(f"reg{i}"))

        assert [p.name for p in registry_file.parent.iterdir()] == [registry_file.name]

    def test_failed_write_keeps_previous_content(self, store, registry_file, monkeypatch):
        store.append(entry("kept"))
        before = registry_file.read_text()

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("registry_ui.services.registry_store.os.replace", failing_replace)

        with pytest.raises(FileOperationError) as exc_info:
            store.append(entry("lost"))

        assert exc_info.value.operation == "write"
        assert registry_file.read_text() == before
        assert [p.name for p in registry_file.parent.iterdir()] == [registry_file.name]

    def test_concurrent_appends_never_share_an_id(self, registry_file):
        workers = 16
        per_worker = 10
        barrier = threading.Barrier(workers)

        def worker(n):
            # Separate store instances over the same file, as in separate requests
            worker_store = RegistryStore(registry_file)
            barrier.wait()
            return [worker_store.append(entry(f"w{n}-{i}")).id for i in range(per_worker)]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(worker, range(workers)))

        ids = [i for chunk in results for i in chunk]
        assert len(ids) == len(set(ids)) == workers * per_worker

        registry_file_doc = RegistryStore(registry_file).load()
        assert len(registry_file_doc.registries) == workers * per_worker
        assert registry_file_doc.last_id == workers * per_worker
        assert sorted(r.id for r in registry_file_doc.registries) == list(range(1, workers * per_worker + 1))

    def test_directory_path_is_a_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            RegistryStore(tmp_path)

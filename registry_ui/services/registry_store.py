"""
File-backed store for registered registries.

The whole list lives in one pretty-printed JSON document of the form
``{"lastId": 2, "list": [...]}``. Every append rewrites the document
through a temporary file that replaces the original, and appends to the
same path are serialized inside the process.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from registry_ui.exceptions import ConfigurationError, FileOperationError
from registry_ui.schemas.registry import Registry, RegistryEntry, RegistryFile
from registry_ui.utils.logging import LoggerMixin

_locks: Dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """Return the process-wide lock guarding writes to ``path``."""
    key = path.resolve()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


class RegistryStore(LoggerMixin):
    """Durable, append-only list of registries."""

    def __init__(self, file_path: str | Path):
        self.file_path = Path(file_path)
        if self.file_path.is_dir():
            raise ConfigurationError(
                f"Registry file path is a directory: {self.file_path}",
                details={'file_path': str(self.file_path)}
            )
        self._lock = _lock_for(self.file_path)

    def load(self) -> RegistryFile:
        """
        Read the registry file.

        Returns:
            RegistryFile: The stored document, or an empty one if the file
            does not exist yet.

        Raises:
            FileOperationError: If the file cannot be read or is not a valid
                registry document.
        """
        try:
            raw = self.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return RegistryFile()
        except OSError as e:
            raise FileOperationError(
                f"Failed to read registry file: {e}",
                file_path=str(self.file_path),
                operation="read"
            ) from e

        try:
            return RegistryFile.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            self.logger.error(f"Registry file {self.file_path} is corrupt: {e}")
            raise FileOperationError(
                "Registry file is malformed",
                file_path=str(self.file_path),
                operation="read"
            ) from e

    def list(self) -> List[Registry]:
        """Return all registries in insertion order."""
        return self.load().registries

    def get(self, registry_id: int) -> Optional[Registry]:
        """Return the registry with the given id, if any."""
        for registry in self.load().registries:
            if registry.id == registry_id:
                return registry
        return None

    def append(self, entry: RegistryEntry) -> Registry:
        """
        Assign the next id to ``entry`` and persist it.

        The file is re-read while the lock is held so that concurrent
        appends always observe each other's ids.

        Args:
            entry: Validated registry without an id.

        Returns:
            Registry: The stored registry including its id.

        Raises:
            FileOperationError: If the file cannot be read or written.
        """
        with self._lock:
            registry_file = self.load()
            registry = Registry(id=registry_file.next_id(), **entry.model_dump())
            registry_file.registries.append(registry)
            registry_file.last_id = registry.id
            self._write(registry_file)

        self.logger.info(f"Stored registry {registry.id} ({registry.name}) at {registry.url}")
        return registry

    def _write(self, registry_file: RegistryFile) -> None:
        payload = json.dumps(
            registry_file.model_dump(by_alias=True, exclude_none=True),
            indent=2,
            ensure_ascii=False
        )

        tmp_path = None
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.file_path.parent,
                prefix=f".{self.file_path.name}.",
                suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            self.logger.error(f"Failed to write registry file {self.file_path}: {e}")
            raise FileOperationError(
                f"Failed to write registry file: {e}",
                file_path=str(self.file_path),
                operation="write"
            ) from e

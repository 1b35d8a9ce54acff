"""Application export – ObjectStore port and a filesystem implementation."""
from __future__ import annotations

import asyncio
from pathlib import Path, PurePath
from typing import Protocol, runtime_checkable

__all__ = ["FileSystemObjectStore", "ObjectStore"]


@runtime_checkable
class ObjectStore(Protocol):
    """Port: stores a built file and returns its location (path, URL or key)."""

    async def put(self, key: str, data: bytes, content_type: str) -> str: ...

    async def exists(self, key: str) -> bool: ...


class FileSystemObjectStore:
    """Writes built files into *directory*; keys are reduced to their basename."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        name = PurePath(key).name
        if not name or name in (".", ".."):
            raise ValueError(f"Invalid file name: {key!r}")
        return self._directory / name

    async def put(self, key: str, data: bytes, content_type: str) -> str:  # noqa: ARG002
        path = self.path_for(key)
        await asyncio.to_thread(self._write, path, data)
        return str(path)

    async def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

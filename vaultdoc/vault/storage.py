"""Storage port and the local filesystem implementation.

Paths handed to a Storage are either vault-relative (slash separated) or
absolute. Relative paths resolve against the vault root, so "../out" names a
sibling of the vault.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from vaultdoc.vault.paths import is_absolute_location

logger = logging.getLogger(__name__)


@runtime_checkable
class Storage(Protocol):
    """Narrow read/write/list capability over the host document store."""

    async def list_files(self) -> list[tuple[str, float]]: ...

    async def read_text(self, path: str) -> str: ...

    async def read_binary(self, path: str) -> bytes: ...

    async def write_text(self, path: str, content: str) -> None: ...

    async def write_binary(self, path: str, data: bytes) -> None: ...

    async def make_directory(self, path: str) -> None: ...


class FilesystemStorage:
    """Storage backed by a vault directory on local disk.

    pathlib calls are blocking, so every operation runs in a worker thread
    via asyncio.to_thread() to keep the event loop free.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        if is_absolute_location(path):
            return Path(path)
        return self.root / path

    async def list_files(self) -> list[tuple[str, float]]:
        """(vault-relative path, mtime) for every visible file, sorted by path."""

        def _sync() -> list[tuple[str, float]]:
            if not self.root.is_dir():
                raise FileNotFoundError(f"Vault directory not found: {self.root}")
            found: list[tuple[str, float]] = []
            for p in self.root.rglob("*"):
                rel = p.relative_to(self.root)
                if any(part.startswith(".") for part in rel.parts):
                    continue
                if not p.is_file():
                    continue
                found.append((rel.as_posix(), p.stat().st_mtime))
            found.sort(key=lambda item: item[0])
            logger.debug("listed %d files under %s", len(found), self.root)
            return found

        return await asyncio.to_thread(_sync)

    async def read_text(self, path: str) -> str:
        return await asyncio.to_thread(self.resolve(path).read_text, encoding="utf-8")

    async def read_binary(self, path: str) -> bytes:
        return await asyncio.to_thread(self.resolve(path).read_bytes)

    async def write_text(self, path: str, content: str) -> None:
        await asyncio.to_thread(self.resolve(path).write_text, content, encoding="utf-8")

    async def write_binary(self, path: str, data: bytes) -> None:
        await asyncio.to_thread(self.resolve(path).write_bytes, data)

    async def make_directory(self, path: str) -> None:
        await asyncio.to_thread(self.resolve(path).mkdir, parents=True, exist_ok=True)

"""Where an export run puts its output: the filesystem, or an in-memory bundle."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

from vaultdoc.errors import DuplicateEntryError, ExportDirectoryError
from vaultdoc.vault.models import (
    BundleMetadata,
    ConvertedEntry,
    EntryKind,
    ExportBundle,
    ExportReport,
    ExportSettings,
)
from vaultdoc.vault.paths import join, normalize_relative
from vaultdoc.vault.storage import Storage

logger = logging.getLogger(__name__)


class Sink(Protocol):
    async def prepare(self, directories: list[str]) -> None: ...

    async def write_document(self, path: str, content: str) -> None: ...

    async def write_asset(self, path: str, data: str | bytes) -> None: ...


class FilesystemSink:
    """Writes entries below target_root through the vault's Storage."""

    def __init__(self, storage: Storage, target_root: str) -> None:
        self.storage = storage
        self.target_root = target_root
        self._written: set[str] = set()

    async def prepare(self, directories: list[str]) -> None:
        """Create the target root (fatal on failure), then each subdirectory once."""
        try:
            await self.storage.make_directory(self.target_root)
        except OSError as exc:
            raise ExportDirectoryError(self.target_root, exc) from exc
        for d in directories:
            try:
                await self.storage.make_directory(join(self.target_root, d))
            except OSError as exc:
                # a later write into this directory records the real failure
                logger.warning(f"Could not create directory {d}: {exc}")

    def _claim(self, path: str) -> str:
        """Each target path is written at most once per run, as in MemorySink."""
        path = normalize_relative(path)
        if path in self._written:
            raise DuplicateEntryError(path)
        return path

    async def write_document(self, path: str, content: str) -> None:
        path = self._claim(path)
        await self.storage.write_text(join(self.target_root, path), content)
        self._written.add(path)

    async def write_asset(self, path: str, data: str | bytes) -> None:
        path = self._claim(path)
        target = join(self.target_root, path)
        if isinstance(data, bytes):
            await self.storage.write_binary(target, data)
        else:
            await self.storage.write_text(target, data)
        self._written.add(path)


class MemorySink:
    """Collects entries for an ExportBundle. Nothing touches disk."""

    def __init__(self) -> None:
        self.entries: list[ConvertedEntry] = []
        self._seen: set[str] = set()

    async def prepare(self, directories: list[str]) -> None:
        return None

    def _add(self, entry: ConvertedEntry) -> None:
        if entry.target_path in self._seen:
            raise DuplicateEntryError(entry.target_path)
        self._seen.add(entry.target_path)
        self.entries.append(entry)

    async def write_document(self, path: str, content: str) -> None:
        self._add(ConvertedEntry.text(normalize_relative(path), content, EntryKind.document))

    async def write_asset(self, path: str, data: str | bytes) -> None:
        path = normalize_relative(path)
        if isinstance(data, bytes):
            self._add(ConvertedEntry.binary(path, data))
        else:
            self._add(ConvertedEntry.text(path, data, EntryKind.asset))

    def bundle(self, settings: ExportSettings, report: ExportReport) -> ExportBundle:
        return ExportBundle(
            entries=list(self.entries),
            metadata=BundleMetadata(
                exported_at=datetime.now(timezone.utc),
                total_files=len(self.entries),
                settings=settings,
            ),
            report=report,
        )

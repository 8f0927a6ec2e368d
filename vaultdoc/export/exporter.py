"""VaultExporter: snapshot the vault, convert documents, copy assets, write the index."""

from __future__ import annotations

import asyncio
import logging
import time

from vaultdoc.renderers.base import Renderability
from vaultdoc.renderers.registry import RendererRegistry
from vaultdoc.transform import ConversionContext, convert
from vaultdoc.vault.classify import is_binary, strip_text_extension, to_target_path
from vaultdoc.vault.models import (
    ExportBundle,
    ExportIssue,
    ExportReport,
    ExportSettings,
    SourceDocument,
)
from vaultdoc.vault.paths import ancestor_dirs, resolve_target
from vaultdoc.vault.storage import Storage

from .index_gen import IndexGenerator, index_path
from .sinks import FilesystemSink, MemorySink, Sink

logger = logging.getLogger(__name__)


class VaultExporter:
    """Runs exports against one vault. One run at a time per exporter."""

    def __init__(self, storage: Storage, renderers: Renderability | None = None) -> None:
        self.storage = storage
        self.renderers = renderers if renderers is not None else RendererRegistry()
        self._lock = asyncio.Lock()

    # -- Public API ----------------------------------------------------------

    async def export_to_disk(self, settings: ExportSettings) -> ExportReport:
        """Write the export next to the vault (or to an absolute target)."""
        target = resolve_target(settings.target_location)
        sink = FilesystemSink(self.storage, target)
        async with self._lock:
            logger.info(f"Exporting vault to {target}")
            report = await self._run(settings, sink)
        logger.info(
            f"Export finished: {report.converted} converted, {report.copied} copied, "
            f"{report.skipped} skipped in {report.duration:.2f}s"
        )
        return report

    async def export_to_memory(self, settings: ExportSettings) -> ExportBundle:
        """Convert everything into an ExportBundle without touching disk."""
        sink = MemorySink()
        async with self._lock:
            report = await self._run(settings, sink)
        logger.info(f"In-memory export finished: {len(sink.entries)} entries")
        return sink.bundle(settings, report)

    async def run(self, settings: ExportSettings, *, in_memory: bool = False) -> ExportReport | ExportBundle:
        if in_memory:
            return await self.export_to_memory(settings)
        return await self.export_to_disk(settings)

    # -- Internals -----------------------------------------------------------

    async def _run(self, settings: ExportSettings, sink: Sink) -> ExportReport:
        start = time.monotonic()
        report = ExportReport()
        ctx = ConversionContext(settings=settings, renderers=self.renderers)

        # One listing per run; files that appear or vanish later are not seen.
        snapshot = [
            SourceDocument.from_path(path, last_modified=mtime)
            for path, mtime in await self.storage.list_files()
        ]
        documents = [d for d in snapshot if d.is_text_document]
        assets = [d for d in snapshot if not d.is_text_document] if settings.include_assets else []

        doc_targets = [to_target_path(d.path) for d in documents]
        await sink.prepare(ancestor_dirs(doc_targets + [a.path for a in assets]))

        index = IndexGenerator()
        for doc, target in zip(documents, doc_targets):
            try:
                content = await self.storage.read_text(doc.path)
                converted = convert(doc.model_copy(update={"content": content}), ctx)
                await sink.write_document(target, converted)
            except Exception as exc:
                report.skipped += 1
                report.issues.append(ExportIssue(file=doc.path, error=str(exc)))
                logger.error(f"Error converting {doc.path}: {exc}")
                continue
            index.add(target, strip_text_extension(doc.name))
            report.converted += 1

        for asset in assets:
            try:
                if is_binary(asset.path):
                    data: str | bytes = await self.storage.read_binary(asset.path)
                else:
                    data = await self.storage.read_text(asset.path)
                await sink.write_asset(asset.path, data)
            except Exception as exc:
                report.skipped += 1
                report.issues.append(ExportIssue(file=asset.path, error=str(exc)))
                logger.error(f"Error copying {asset.path}: {exc}")
                continue
            report.copied += 1

        claimed = set(doc_targets) | {a.path for a in assets}
        await sink.write_document(index_path(claimed), index.generate())

        report.duration = time.monotonic() - start
        return report

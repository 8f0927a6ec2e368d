"""ArchiveStreamer: turns an ExportBundle into a stream of tar chunks."""

from __future__ import annotations

import io
import logging
import tarfile
from collections.abc import Iterator

from vaultdoc.vault.models import ExportBundle

logger = logging.getLogger(__name__)


class _ChunkBuffer:
    """Write-only file object that tarfile's stream mode writes into."""

    def __init__(self) -> None:
        self._chunks: list[bytes] = []

    def write(self, data: bytes) -> int:
        self._chunks.append(bytes(data))
        return len(data)

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks.clear()
        return data


class ArchiveStreamer:
    """Streams a bundle as a tar archive, one entry per ConvertedEntry.

    The archive is produced incrementally: each entry is written in turn and
    whatever bytes tarfile has flushed so far are yielded. Closing the archive
    writes the end-of-archive blocks, which form the final chunk. Iterate once.
    """

    def __init__(self, bundle: ExportBundle) -> None:
        self.bundle = bundle
        self.written = 0

    def __iter__(self) -> Iterator[bytes]:
        mtime = int(self.bundle.metadata.exported_at.timestamp())
        buffer = _ChunkBuffer()
        with tarfile.open(fileobj=buffer, mode="w|", format=tarfile.PAX_FORMAT) as tar:
            for entry in self.bundle.entries:
                try:
                    data = entry.payload()
                except ValueError as exc:
                    logger.error(f"Skipping {entry.target_path}: undecodable payload ({exc})")
                    continue
                info = tarfile.TarInfo(name=entry.target_path)
                info.size = len(data)
                info.mtime = mtime
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(data))
                self.written += 1
                chunk = buffer.drain()
                if chunk:
                    yield chunk
        tail = buffer.drain()
        if tail:
            yield tail

    def to_bytes(self) -> bytes:
        return b"".join(self)

"""Export orchestration: filesystem and in-memory runs."""

from vaultdoc.export.exporter import VaultExporter
from vaultdoc.export.index_gen import IndexGenerator, index_path
from vaultdoc.export.sinks import FilesystemSink, MemorySink, Sink

__all__ = [
    "FilesystemSink",
    "IndexGenerator",
    "MemorySink",
    "Sink",
    "VaultExporter",
    "index_path",
]

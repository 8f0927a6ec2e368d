"""Vault snapshot models, extension classification, and the storage port."""

from .models import (
    BundleMetadata,
    ConvertedEntry,
    EntryKind,
    ExportBundle,
    ExportIssue,
    ExportReport,
    ExportSettings,
    SourceDocument,
)
from .storage import FilesystemStorage, Storage

__all__ = [
    "BundleMetadata",
    "ConvertedEntry",
    "EntryKind",
    "ExportBundle",
    "ExportIssue",
    "ExportReport",
    "ExportSettings",
    "FilesystemStorage",
    "SourceDocument",
    "Storage",
]

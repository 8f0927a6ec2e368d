"""HTTP export API: tar streaming of in-memory exports."""

from vaultdoc.server.app import ExportAPI, settings_from_json, settings_from_query
from vaultdoc.server.archive import ArchiveStreamer
from vaultdoc.server.http import ExportServer

__all__ = [
    "ArchiveStreamer",
    "ExportAPI",
    "ExportServer",
    "settings_from_json",
    "settings_from_query",
]

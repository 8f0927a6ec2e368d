"""Pydantic models for one export run: sources, settings, entries, bundle, report."""

from __future__ import annotations

import base64
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from vaultdoc.vault.classify import extension_of, is_text_document


class SourceDocument(BaseModel):
    """Immutable snapshot of one vault file, taken once per export run."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    name: str
    extension: str
    content: str | None = None
    last_modified: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_text_document(self) -> bool:
        return is_text_document(self.path)

    @classmethod
    def from_path(
        cls, path: str, content: str | None = None, last_modified: float = 0.0
    ) -> SourceDocument:
        name = path.rsplit("/", 1)[-1]
        return cls(
            path=path,
            name=name,
            extension=extension_of(path),
            content=content,
            last_modified=last_modified,
        )


class ExportSettings(BaseModel):
    """Finished, validated settings for a single export run."""

    model_config = ConfigDict(frozen=True)

    target_location: str = "vault-export"
    include_assets: bool = True
    preserve_diagram_source: bool = True
    format: Literal["asciidoc"] = "asciidoc"


class EntryKind(str, Enum):
    document = "document"
    asset = "asset"


class ConvertedEntry(BaseModel):
    """One output file. Binary payloads travel base64 encoded."""

    model_config = ConfigDict(frozen=True)

    target_path: str
    content: str
    kind: EntryKind
    encoding: Literal["utf-8", "base64"] = "utf-8"
    size: int = 0

    @classmethod
    def text(cls, target_path: str, content: str, kind: EntryKind) -> ConvertedEntry:
        return cls(
            target_path=target_path,
            content=content,
            kind=kind,
            size=len(content.encode("utf-8")),
        )

    @classmethod
    def binary(cls, target_path: str, data: bytes) -> ConvertedEntry:
        return cls(
            target_path=target_path,
            content=base64.b64encode(data).decode("ascii"),
            kind=EntryKind.asset,
            encoding="base64",
            size=len(data),
        )

    def payload(self) -> bytes:
        """Raw bytes of the entry, decoding the transport encoding."""
        if self.encoding == "base64":
            return base64.b64decode(self.content, validate=True)
        return self.content.encode("utf-8")


class ExportIssue(BaseModel):
    file: str
    error: str


class ExportReport(BaseModel):
    converted: int = 0
    copied: int = 0
    skipped: int = 0
    issues: list[ExportIssue] = []
    duration: float = 0.0


class BundleMetadata(BaseModel):
    exported_at: datetime
    total_files: int
    settings: ExportSettings


class ExportBundle(BaseModel):
    """In-memory result of one export run, prior to archiving."""

    entries: list[ConvertedEntry]
    metadata: BundleMetadata
    report: ExportReport = Field(default_factory=ExportReport)

    def paths(self) -> list[str]:
        return [e.target_path for e in self.entries]

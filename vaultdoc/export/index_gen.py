"""Generates the index.adoc landing page listing every converted document."""

from __future__ import annotations

from datetime import date

from vaultdoc.vault.classify import TARGET_EXTENSION

INDEX_NAME = f"index.{TARGET_EXTENSION}"


def index_path(claimed: set[str]) -> str:
    """index.adoc, or the first _index.adoc variant no vault document already claims."""
    name = INDEX_NAME
    while name in claimed:
        name = "_" + name
    return name


class IndexGenerator:
    def __init__(self) -> None:
        self.documents: list[tuple[str, str]] = []

    def add(self, target_path: str, title: str) -> None:
        """Record a converted document. Listing order is the order of add() calls."""
        self.documents.append((target_path, title))

    def generate(self, exported_on: date | None = None) -> str:
        exported_on = exported_on or date.today()
        parts: list[str] = []
        parts.append("= Vault Export")
        parts.append(":doctype: article")
        parts.append(":toc: left")
        parts.append(":toclevels: 3")
        parts.append(":sectlinks:")
        parts.append(":sectanchors:")
        parts.append("")
        parts.append(f"Exported on {exported_on.isoformat()}")
        parts.append("")
        parts.append("== Files")
        parts.append("")
        for path, title in self.documents:
            parts.append(f"* xref:{path}[{title}]")
        parts.append("")
        parts.append("'''")
        parts.append("")
        parts.append("_This export was generated by vaultdoc._")
        parts.append("")
        return "\n".join(parts)

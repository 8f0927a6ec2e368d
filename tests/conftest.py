"""Shared test fixtures for vaultdoc."""

from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest

from vaultdoc.config import RendererConfig
from vaultdoc.export import VaultExporter
from vaultdoc.renderers import RendererRegistry
from vaultdoc.transform import ConversionContext
from vaultdoc.vault import ExportSettings, FilesystemStorage, SourceDocument

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe"


def write_vault(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create a vault directory from {relative path: content}."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


def make_doc(content: str, path: str = "note.md") -> SourceDocument:
    return SourceDocument.from_path(path, content=content)


def tar_members(data: bytes) -> dict[str, bytes]:
    """{name: payload} of every member in a tar archive, in archive order."""
    members: dict[str, bytes] = {}
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:") as tar:
        for info in tar.getmembers():
            f = tar.extractfile(info)
            members[info.name] = f.read() if f else b""
    return members


@pytest.fixture
def ctx():
    return ConversionContext()


@pytest.fixture
def render_ctx():
    """Diagram rendering enabled with the built-in renderers."""
    return ConversionContext(
        settings=ExportSettings(preserve_diagram_source=False),
        renderers=RendererRegistry.from_config(RendererConfig(custom_plugins=False)),
    )


@pytest.fixture
def linked_vault(tmp_path):
    """notes/a.md links to its sibling notes/b.md."""
    return write_vault(tmp_path / "vault", {
        "notes/a.md": "# Title\n\nSee [[b]] for more.\n",
        "notes/b.md": "Plain body.\n",
    })


@pytest.fixture
def mixed_vault(tmp_path):
    """Documents, a binary image, a text attachment and an ignored dot-folder."""
    return write_vault(tmp_path / "vault", {
        "notes/a.md": "# Title\n\n![[pic.png]]\n",
        "notes/b.md": "Plain body.\n",
        "pic.png": PNG_BYTES,
        "data.csv": "x,y\n1,2\n",
        ".obsidian/app.json": "{}",
    })


@pytest.fixture
def exporter_for():
    def _make(root: Path) -> VaultExporter:
        return VaultExporter(FilesystemStorage(root))
    return _make

"""Embeds, [[wikilinks]] and ^block references -> AsciiDoc includes, images and xrefs."""

from __future__ import annotations

import posixpath
import re

from vaultdoc.vault.classify import (
    TARGET_EXTENSION,
    extension_of,
    is_image,
    strip_text_extension,
    to_target_path,
)

from .pipeline import CODE_SPAN, DocumentState, Transform

_EMBED_RE = re.compile(rf"(?P<skip>{CODE_SPAN})|!\[\[(?P<target>[^\]|]+)(?:\|(?P<alias>[^\]]+))?\]\]")
_WIKILINK_RE = re.compile(rf"(?P<skip>{CODE_SPAN})|\[\[(?P<target>[^\]|]+)(?:\|(?P<alias>[^\]]+))?\]\]")
_BLOCK_ID_RE = re.compile(r"[ \t]+\^([A-Za-z0-9\-_]+)[ \t]*$", re.MULTILINE)
_BLOCK_LINK_RE = re.compile(r"\[\[([^\]|#]+)#\^([A-Za-z0-9\-_]+)(?:\|([^\]]+))?\]\]")


def sanitize_name(name: str) -> str:
    """'My Note (v2)' -> 'my-note-v2'. Idempotent."""
    name = re.sub(r"[^a-z0-9\-_]", "-", name.lower())
    name = re.sub(r"-+", "-", name)
    return name.strip("-")


def xref_target(note: str) -> str:
    """Cross-reference file name for a wikilink target."""
    return f"{sanitize_name(strip_text_extension(note.strip()))}.{TARGET_EXTENSION}"


def _embed(m: re.Match) -> str:
    if m.group("skip"):
        return m.group("skip")
    target = m.group("target").strip()
    alias = m.group("alias")
    if is_image(target):
        alt = alias.strip() if alias else posixpath.splitext(posixpath.basename(target))[0]
        return f"image::{target}[{alt}]"
    note = target.split("#", 1)[0]
    if not extension_of(note):
        return f"include::{note}.{TARGET_EXTENSION}[]"
    return f"include::{to_target_path(note)}[]"


def _wikilink(m: re.Match) -> str:
    if m.group("skip"):
        return m.group("skip")
    target = m.group("target").strip()
    text = (m.group("alias") or m.group("target")).strip()
    if "#^" in target:
        # block references belong to BlockReferenceConverter
        return m.group(0)
    if "#" in target:
        note, section = target.split("#", 1)
        return f"xref:{xref_target(note)}#{sanitize_name(section)}[{text}]"
    return f"xref:{xref_target(target)}[{text}]"


def _block_link(m: re.Match) -> str:
    note, block_id, text = m.group(1).strip(), m.group(2), m.group(3)
    label = text.strip() if text else f"{note} (Block)"
    return f"xref:{xref_target(note)}#block-{block_id}[{label}]"


class EmbedConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _EMBED_RE.sub(_embed, content)


class WikilinkConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _WIKILINK_RE.sub(_wikilink, content)


class BlockReferenceConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        content = _BLOCK_ID_RE.sub(lambda m: f" [[block-{m.group(1)}]]", content)
        return _BLOCK_LINK_RE.sub(_block_link, content)

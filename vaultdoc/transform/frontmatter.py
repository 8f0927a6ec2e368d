"""Frontmatter extraction (first stage) and AsciiDoc document header injection (last stage)."""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml

from vaultdoc.vault.classify import strip_text_extension

from .pipeline import DocumentState, Transform

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)

STANDARD_ATTRIBUTES = """\
:doctype: article
:toc: left
:toclevels: 3
:sectlinks:
:sectanchors:
:source-highlighter: highlight.js
:stem: latexmath
"""


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Return (metadata, body). Content without a leading --- block comes back unchanged."""
    m = _FRONTMATTER_RE.match(content)
    if not m:
        return {}, content
    body = content[m.end():]
    raw = m.group(1)
    try:
        loaded = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        logger.debug("frontmatter is not valid YAML, falling back to line scan: %s", exc)
        loaded = None
    if isinstance(loaded, dict):
        return {str(k): _normalize(v) for k, v in loaded.items()}, body
    return _scan_lines(raw), body


def _normalize(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_normalize_scalar(v) for v in value if v is not None]
    return _normalize_scalar(value)


def _normalize_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return " ".join(str(value).split())


def _unquote(value: str) -> str:
    return re.sub(r"^['\"]|['\"]$", "", value)


def _scan_lines(raw: str) -> dict[str, Any]:
    """Best-effort key: value parsing. Lines that don't fit are ignored."""
    result: dict[str, Any] = {}
    lines = raw.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, _, value = line.partition(":")
        key, value = key.strip(), value.strip()
        if not key or key.startswith("-"):
            continue
        if value.startswith("[") and value.endswith("]"):
            result[key] = [_unquote(v.strip()) for v in value[1:-1].split(",") if v.strip()]
        elif not value:
            # indented "- item" list on the following lines
            items: list[str] = []
            while i < len(lines) and lines[i].strip().startswith("-"):
                items.append(_unquote(lines[i].strip()[1:].strip()))
                i += 1
            result[key] = items if items else ""
        else:
            result[key] = _unquote(value)
    return result


class FrontmatterExtractor(Transform):
    """Strips the leading metadata block and keeps it on the document state."""

    def apply(self, content: str, state: DocumentState) -> str:
        metadata, body = split_frontmatter(content)
        state.frontmatter = metadata
        return body


def _joined(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value if str(v))
    return str(value)


def build_header_attributes(meta: dict[str, Any]) -> list[str]:
    """Map recognized frontmatter keys onto AsciiDoc attribute lines."""
    lines: list[str] = []
    if author := meta.get("author"):
        lines.append(f":author: {_joined(author)}")
    if email := meta.get("email"):
        lines.append(f":email: {_joined(email)}")
    revdate = meta.get("modified") or meta.get("created")
    if revdate:
        lines.append(f":revdate: {_joined(revdate)}")
    if description := meta.get("description"):
        lines.append(f":description: {_joined(description)}")

    keywords: list[str] = []
    for key in ("keywords", "tags"):
        value = meta.get(key)
        if not value:
            continue
        for item in value if isinstance(value, list) else _joined(value).split(","):
            item = str(item).strip().lstrip("#")
            if item and item not in keywords:
                keywords.append(item)
    if keywords:
        lines.append(f":keywords: {', '.join(keywords)}")

    if aliases := meta.get("aliases"):
        lines.append(f":aliases: {_joined(aliases)}")

    css = meta.get("cssclass") or meta.get("cssclasses")
    if css:
        first = css[0] if isinstance(css, list) else str(css).split(",")[0].strip()
        if first:
            lines.append(f":stylesheet: {first}.css")
    return lines


class DocumentHeader(Transform):
    """Prepends the title line, frontmatter attributes, and the fixed attribute block."""

    def apply(self, content: str, state: DocumentState) -> str:
        title = strip_text_extension(state.document.name)
        header = [f"= {title}"]
        header.extend(build_header_attributes(state.frontmatter))
        return "\n".join(header) + "\n" + STANDARD_ATTRIBUTES + "\n" + content

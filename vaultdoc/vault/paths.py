"""Slash-separated path helpers and export target resolution."""

from __future__ import annotations

import posixpath
import re

from vaultdoc.errors import PathTraversalError

DEFAULT_EXPORT_FOLDER = "vault-export"

# C:\, D:/ ...
_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")


def is_absolute_location(path: str) -> bool:
    """True for Unix absolute paths, drive-letter paths, and UNC shares."""
    return path.startswith("/") or bool(_DRIVE_RE.match(path)) or path.startswith("\\\\")


def resolve_target(location: str) -> str:
    """Resolve an export target so it can never land inside the vault.

    Absolute locations are returned unchanged. Anything else becomes a
    sibling of the vault root: "out" -> "../out".
    """
    location = location.strip() or DEFAULT_EXPORT_FOLDER
    if is_absolute_location(location):
        return location
    while location.startswith("./"):
        location = location[2:]
    return "../" + location


def dirname(path: str) -> str:
    """'a/b/c.md' -> 'a/b'; '' for top-level files."""
    head = path.rsplit("/", 1)
    return head[0] if len(head) == 2 else ""


def ancestor_dirs(paths: list[str]) -> list[str]:
    """Every directory implied by the given file paths, parents first, no duplicates."""
    seen: dict[str, None] = {}
    for path in paths:
        parts = dirname(path).split("/") if dirname(path) else []
        current = ""
        for part in parts:
            current = f"{current}/{part}" if current else part
            seen.setdefault(current, None)
    return list(seen)


def normalize_relative(path: str) -> str:
    """Normalize a vault-relative path, rejecting anything that climbs out of its root."""
    norm = posixpath.normpath(path.replace("\\", "/"))
    if norm in ("", ".") or norm.startswith("../") or norm == ".." or norm.startswith("/"):
        raise PathTraversalError(path, ".")
    return norm


def join(root: str, rel: str) -> str:
    """Join an export root and a relative entry path, keeping the root's separator style."""
    rel = normalize_relative(rel)
    if "\\" in root and is_absolute_location(root):
        return root.rstrip("\\") + "\\" + rel.replace("/", "\\")
    return re.sub(r"/+", "/", f"{root}/{rel}")

"""Static extension classification shared by filesystem and memory exports."""

from __future__ import annotations

import posixpath

TEXT_DOCUMENT_EXTENSIONS: frozenset[str] = frozenset({"md", "markdown"})

IMAGE_EXTENSIONS: frozenset[str] = frozenset({"png", "jpg", "jpeg", "gif", "svg", "webp", "bmp"})

BINARY_EXTENSIONS: frozenset[str] = frozenset({
    "png", "jpg", "jpeg", "gif", "svg", "pdf", "mp4", "mp3", "webp",
    "bmp", "tiff", "zip", "rar", "7z", "exe", "dmg",
})

TARGET_EXTENSION = "adoc"


def extension_of(path: str) -> str:
    """Lowercased extension without the dot, '' when there is none."""
    ext = posixpath.splitext(posixpath.basename(path))[1]
    return ext[1:].lower()


def is_text_document(path: str) -> bool:
    return extension_of(path) in TEXT_DOCUMENT_EXTENSIONS


def is_image(path: str) -> bool:
    return extension_of(path) in IMAGE_EXTENSIONS


def is_binary(path: str) -> bool:
    return extension_of(path) in BINARY_EXTENSIONS


def strip_text_extension(name: str) -> str:
    """notes.md -> notes; other names are returned unchanged."""
    stem, ext = posixpath.splitext(name)
    if ext[1:].lower() in TEXT_DOCUMENT_EXTENSIONS:
        return stem
    return name


def to_target_path(path: str) -> str:
    """notes/a.md -> notes/a.adoc"""
    return f"{strip_text_extension(path)}.{TARGET_EXTENSION}"

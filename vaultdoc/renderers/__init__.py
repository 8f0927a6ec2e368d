"""Diagram renderer capability registry."""

from .base import DiagramRenderer, Renderability
from .builtin import BUILTIN_RENDERERS, AsciidoctorDiagramRenderer
from .registry import ENTRY_POINT_GROUP, RendererRegistry

__all__ = [
    "AsciidoctorDiagramRenderer",
    "BUILTIN_RENDERERS",
    "DiagramRenderer",
    "ENTRY_POINT_GROUP",
    "Renderability",
    "RendererRegistry",
]

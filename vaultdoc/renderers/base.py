"""Renderer plugin interface and the renderability port used by the converter."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DiagramRenderer(Protocol):
    """Renders one family of diagram code fences into AsciiDoc."""

    name: str

    def supported_types(self) -> list[str]: ...

    def render(self, language: str, source: str) -> str | None: ...


@runtime_checkable
class Renderability(Protocol):
    """What the converter needs to know: can a fence language be rendered, and how."""

    def can_render(self, language: str) -> bool: ...

    def render(self, language: str, source: str) -> str | None: ...

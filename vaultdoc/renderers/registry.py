"""RendererRegistry: which code-fence languages can be rendered, and by whom."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING

from vaultdoc.renderers.base import DiagramRenderer
from vaultdoc.renderers.builtin import BUILTIN_RENDERERS

if TYPE_CHECKING:
    from vaultdoc.config.models import RendererConfig

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "vaultdoc.renderers"


class RendererRegistry:
    """Maps fence languages to renderers. An empty registry renders nothing."""

    def __init__(self, renderers: list[DiagramRenderer] | None = None) -> None:
        self._renderers: list[DiagramRenderer] = []
        self._by_language: dict[str, DiagramRenderer] = {}
        for renderer in renderers or []:
            self.register(renderer)

    @classmethod
    def from_config(cls, config: RendererConfig) -> RendererRegistry:
        registry = cls()
        for name in config.builtin:
            renderer = BUILTIN_RENDERERS.get(name)
            if renderer is None:
                logger.warning("Unknown built-in renderer '%s' ignored", name)
                continue
            registry.register(renderer)
        if config.custom_plugins:
            registry.discover()
        return registry

    def register(self, renderer: DiagramRenderer) -> None:
        """Add a renderer. Earlier registrations keep languages they already claim."""
        self._renderers.append(renderer)
        for language in renderer.supported_types():
            self._by_language.setdefault(language.lower(), renderer)

    def discover(self) -> list[str]:
        """Load third-party renderers from entry points. Returns the names loaded."""
        loaded: list[str] = []
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            try:
                obj = ep.load()
                renderer = obj() if isinstance(obj, type) else obj
            except Exception:
                logger.exception("Failed to load renderer plugin '%s'", ep.name)
                continue
            if not isinstance(renderer, DiagramRenderer):
                logger.warning("Entry point '%s' is not a DiagramRenderer, skipped", ep.name)
                continue
            self.register(renderer)
            loaded.append(ep.name)
        return loaded

    def can_render(self, language: str) -> bool:
        return language.lower() in self._by_language

    def render(self, language: str, source: str) -> str | None:
        """Render a fence, or None when no renderer takes it or rendering fails."""
        renderer = self._by_language.get(language.lower())
        if renderer is None:
            return None
        try:
            return renderer.render(language, source)
        except Exception as exc:
            logger.warning("Renderer %s failed on %s block: %s", renderer.name, language, exc)
            return None

    def describe(self) -> list[tuple[str, list[str]]]:
        """(renderer name, languages) for every registered renderer."""
        return [(r.name, r.supported_types()) for r in self._renderers]

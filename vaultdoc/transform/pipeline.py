"""TransformPipeline: runs ordered transforms on one markdown document."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from vaultdoc.renderers.base import Renderability
from vaultdoc.renderers.registry import RendererRegistry
from vaultdoc.vault.models import ExportSettings, SourceDocument

# Raw ``` fences, plus the literal/passthrough blocks the pipeline itself emits
# ([source,x] ----, [stem] ++++, [mermaid] ....). Prose rules must not touch these.
_PROTECTED_RE = re.compile(
    r"^```[^\n]*\n.*?^```[ \t]*$"
    r"|^\[[^\]\n]*\]\n(----|\+\+\+\+|\.\.\.\.)\n.*?^\1[ \t]*$",
    re.MULTILINE | re.DOTALL,
)

# Inline `code` span. Inline rules put this first in their alternation and keep it as-is.
CODE_SPAN = r"`[^`\n]*`"


@dataclass(frozen=True)
class ConversionContext:
    """Settings plus the renderability lookup. Shared by every document, never mutated."""

    settings: ExportSettings = field(default_factory=ExportSettings)
    renderers: Renderability = field(default_factory=RendererRegistry)


@dataclass
class DocumentState:
    """Per-document side channel. The frontmatter is filled by the first stage, read by the last."""

    document: SourceDocument
    context: ConversionContext
    frontmatter: dict[str, Any] = field(default_factory=dict)


def map_unprotected(content: str, fn: Callable[[str], str]) -> str:
    """Apply fn to every stretch of content outside protected blocks."""
    parts: list[str] = []
    pos = 0
    for m in _PROTECTED_RE.finditer(content):
        parts.append(fn(content[pos:m.start()]))
        parts.append(m.group(0))
        pos = m.end()
    parts.append(fn(content[pos:]))
    return "".join(parts)


class Transform(ABC):
    # Prose rules set this so code and math blocks pass through untouched.
    protect_blocks: bool = False

    @abstractmethod
    def apply(self, content: str, state: DocumentState) -> str:
        """Transform document content."""
        ...


class TransformPipeline:
    def __init__(self, transforms: list[Transform]):
        self.transforms = transforms

    def apply(self, content: str, state: DocumentState) -> str:
        for t in self.transforms:
            if t.protect_blocks:
                content = map_unprotected(content, lambda text, t=t: t.apply(text, state))
            else:
                content = t.apply(content, state)
        return content

"""Fenced code blocks -> [source] listing blocks, or rendered diagram blocks."""

from __future__ import annotations

import logging
import re

from .pipeline import DocumentState, Transform

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```([\w+#.-]*)[^\n]*\n(.*?)^```[ \t]*$", re.MULTILINE | re.DOTALL)

DEFAULT_LANGUAGE = "text"


def source_block(language: str, code: str) -> str:
    return f"[source,{language or DEFAULT_LANGUAGE}]\n----\n{code}\n----"


class CodeFenceConverter(Transform):
    """Runs on the whole document: the fences it rewrites are the protected regions."""

    def apply(self, content: str, state: DocumentState) -> str:
        settings = state.context.settings
        renderers = state.context.renderers

        def replace(m: re.Match) -> str:
            language = m.group(1)
            code = m.group(2)
            if code.endswith("\n"):
                code = code[:-1]
            if settings.preserve_diagram_source or not language or not renderers.can_render(language):
                return source_block(language, code)
            rendered = renderers.render(language, code)
            if rendered is None:
                logger.debug("%s: %s block left as source", state.document.path, language)
                return source_block(language, code)
            return rendered

        return _FENCE_RE.sub(replace, content)

"""$$block$$ and $inline$ math -> stem passthrough blocks and latexmath macros."""

import re

from .pipeline import DocumentState, Transform, map_unprotected

_BLOCK_MATH_RE = re.compile(r"\$\$(.*?)\$\$", re.DOTALL)
_INLINE_MATH_RE = re.compile(r"\$([^$\n]+)\$")


class MathConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        # Block math first so the inline rule can't pair up the $$ delimiters.
        content = _BLOCK_MATH_RE.sub(lambda m: f"[stem]\n++++\n{m.group(1).strip()}\n++++", content)
        return map_unprotected(content, lambda text: _INLINE_MATH_RE.sub(r"latexmath:[\1]", text))

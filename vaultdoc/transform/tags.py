"""Inline #tags -> [.tag]#tag# role spans."""

import re

from .pipeline import CODE_SPAN, DocumentState, Transform

# Needs a whitespace/line-start boundary, and a purely numeric "#123" is not a tag.
_TAG_RE = re.compile(
    rf"(?P<skip>{CODE_SPAN})"
    r"|(?<!\S)#(?![0-9]+(?![A-Za-z0-9_/\-]))(?P<tag>[A-Za-z0-9_/\-]+)"
)


def _tag(m: re.Match) -> str:
    if m.group("skip"):
        return m.group("skip")
    return f"[.tag]#{m.group('tag')}#"


class TagRewriter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _TAG_RE.sub(_tag, content)

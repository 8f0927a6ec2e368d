"""Standard markdown rules: headers, emphasis, lists, links, images, rules, quotes."""

from __future__ import annotations

import posixpath
import re

from .pipeline import CODE_SPAN, DocumentState, Transform

_HEADER_RE = re.compile(r"^(#{1,6})[ \t]+(.+)$", re.MULTILINE)

# One pass, first alternative wins: code spans and math macros are skipped,
# then **strong**, __strong__, and *italic* not touching another asterisk.
_EMPHASIS_RE = re.compile(
    rf"(?P<skip>{CODE_SPAN}|latexmath:\[[^\]\n]*\])"
    r"|\*\*(?P<strong>[^*\n]+)\*\*"
    r"|__(?P<under>[^_\n]+)__"
    r"|(?<!\*)\*(?!\*)(?P<em>[^*\s](?:[^*\n]*[^*\s])?)\*(?!\*)"
)

_UNORDERED_RE = re.compile(r"^([ \t]*)[-*+][ \t]+(.+)$", re.MULTILINE)
_ORDERED_RE = re.compile(r"^([ \t]*)\d+\.[ \t]+(.+)$", re.MULTILINE)
_LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]+)\)")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)\)")
# Exactly four underscores is the quote-block delimiter, not a rule.
_RULE_RE = re.compile(r"^[ \t]*(?:-{3,}|\*{3,}|_{3}|_{5,})[ \t]*$", re.MULTILINE)
_BLOCKQUOTE_RE = re.compile(r"^>[ \t]*(.+)$", re.MULTILINE)


class HeaderConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _HEADER_RE.sub(lambda m: "=" * len(m.group(1)) + " " + m.group(2), content)


def _emphasis(m: re.Match) -> str:
    if m.group("skip"):
        return m.group("skip")
    if m.group("strong") is not None:
        return f"*{m.group('strong')}*"
    if m.group("under") is not None:
        return f"*{m.group('under')}*"
    return f"_{m.group('em')}_"


class EmphasisConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _EMPHASIS_RE.sub(_emphasis, content)


class InlineCodeConverter(Transform):
    """`code` is the same in AsciiDoc."""

    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return content


def _list_level(indent: str) -> int:
    return len(indent.expandtabs(2)) // 2 + 1


class ListConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        content = _UNORDERED_RE.sub(lambda m: "*" * _list_level(m.group(1)) + " " + m.group(2), content)
        return _ORDERED_RE.sub(lambda m: "." * _list_level(m.group(1)) + " " + m.group(2), content)


def _link(m: re.Match) -> str:
    text, url = m.group(1), m.group(2)
    if url.startswith(("http://", "https://")):
        return f"{url}[{text}]"
    return f"link:{url}[{text}]"


class LinkConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _LINK_RE.sub(_link, content)


def _image(m: re.Match) -> str:
    alt, path = m.group(1), m.group(2)
    if not alt:
        alt = posixpath.splitext(posixpath.basename(path))[0]
    return f"image::{path}[{alt}]"


class ImageConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _IMAGE_RE.sub(_image, content)


class HorizontalRuleConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _RULE_RE.sub("'''", content)


class BlockquoteConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return _BLOCKQUOTE_RE.sub(lambda m: f"____\n{m.group(1)}\n____", content)

"""Obsidian callouts -> AsciiDoc admonition blocks.

A small line scanner with two states. IDLE copies lines through until a callout
header such as ``> [!warning]- Careful`` opens a block; COLLECTING consumes every
following ``>`` line into the block body and closes it at the first line that is
not quoted.
"""

from __future__ import annotations

import re
from enum import Enum

from .pipeline import DocumentState, Transform

CALLOUT_KINDS = ("note", "tip", "important", "warning", "caution", "example", "quote")

_HEADER_RE = re.compile(
    r"^>\s*\[!(" + "|".join(CALLOUT_KINDS) + r")\]([+-])?\s*(.*?)\s*$",
    re.IGNORECASE,
)
_QUOTE_PREFIX_RE = re.compile(r"^>\s?")


class _State(Enum):
    IDLE = "idle"
    COLLECTING = "collecting"


def _open_block(kind: str, fold: str | None, title: str) -> list[str]:
    lines = [f"[{kind.upper()}]"]
    if title:
        lines.append(f".{title}")
    if fold == "-":
        lines.append("[%collapsible]")
    elif fold == "+":
        lines.append("[%collapsible%open]")
    lines.append("====")
    return lines


def convert_callouts(lines: list[str]) -> list[str]:
    result: list[str] = []
    state = _State.IDLE
    for line in lines:
        if state is _State.COLLECTING:
            if line.startswith(">"):
                result.append(_QUOTE_PREFIX_RE.sub("", line, count=1))
                continue
            result.append("====")
            state = _State.IDLE

        m = _HEADER_RE.match(line)
        if m:
            kind, fold, title = m.groups()
            result.extend(_open_block(kind, fold, title))
            state = _State.COLLECTING
        else:
            result.append(line)

    if state is _State.COLLECTING:
        result.append("====")
    return result


class CalloutConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return "\n".join(convert_callouts(content.split("\n")))

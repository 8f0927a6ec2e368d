"""Pipe tables -> |=== blocks.

Contiguous lines that start and end with ``|`` are buffered; the run ends at the
first other line and is flushed as one table. The markdown separator row is
dropped and the first row becomes the emphasized header.
"""

from __future__ import annotations

import re

from .pipeline import DocumentState, Transform

_SEPARATOR_RE = re.compile(r"^\|[\s|:\-]+\|$")


def _is_row(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= 2 and stripped.startswith("|") and stripped.endswith("|")


def _cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip()[1:-1].split("|")]


def _render_table(rows: list[str]) -> list[str]:
    body = [r for r in rows if not _SEPARATOR_RE.match(r.strip()) or "-" not in r]
    if not body:
        return []
    parsed = [_cells(r) for r in body]
    columns = max(len(cells) for cells in parsed)
    out = [f'[cols="{",".join("1" * columns)}"]', "|==="]
    out.append(" ".join(f"|*{c}*" for c in parsed[0]))
    for cells in parsed[1:]:
        out.append(" ".join(f"|{c}" for c in cells))
    out.append("|===")
    return out


def convert_tables(lines: list[str]) -> list[str]:
    result: list[str] = []
    buffered: list[str] = []
    for line in lines:
        if _is_row(line):
            buffered.append(line)
            continue
        if buffered:
            result.extend(_render_table(buffered))
            buffered = []
        result.append(line)
    if buffered:
        result.extend(_render_table(buffered))
    return result


class TableConverter(Transform):
    protect_blocks = True

    def apply(self, content: str, state: DocumentState) -> str:
        return "\n".join(convert_tables(content.split("\n")))

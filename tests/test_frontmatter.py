"""Tests for frontmatter extraction and header attribute mapping."""

from __future__ import annotations

from conftest import make_doc

from vaultdoc.transform import ConversionContext, convert
from vaultdoc.transform.frontmatter import build_header_attributes, split_frontmatter


class TestSplitFrontmatter:
    def test_yaml_block(self):
        meta, body = split_frontmatter("---\nauthor: Jane\ntags: [a, b]\n---\nBody\n")
        assert meta == {"author": "Jane", "tags": ["a", "b"]}
        assert body == "Body\n"

    def test_no_block_returns_content_unchanged(self):
        meta, body = split_frontmatter("# Title\n---\n")
        assert meta == {}
        assert body == "# Title\n---\n"

    def test_dates_become_strings(self):
        meta, _ = split_frontmatter("---\ncreated: 2024-01-02\n---\n")
        assert meta["created"] == "2024-01-02"

    def test_malformed_yaml_falls_back_to_line_scan(self):
        raw = "---\nauthor: Jane\nbroken: [unclosed\ntags:\n  - x\n  - y\nnot a pair\n---\nBody"
        meta, body = split_frontmatter(raw)
        assert meta["author"] == "Jane"
        assert meta["tags"] == ["x", "y"]
        assert "not a pair" not in meta
        assert body == "Body"


class TestHeaderAttributes:
    def test_recognized_keys_in_order(self):
        lines = build_header_attributes({
            "author": "Jane",
            "email": "jane@example.com",
            "created": "2024-01-01",
            "modified": "2024-02-01",
            "description": "About things",
            "keywords": "alpha, beta",
            "tags": ["beta", "#gamma"],
            "aliases": ["J", "Janie"],
            "cssclass": "wide",
        })
        assert lines == [
            ":author: Jane",
            ":email: jane@example.com",
            ":revdate: 2024-02-01",
            ":description: About things",
            ":keywords: alpha, beta, gamma",
            ":aliases: J, Janie",
            ":stylesheet: wide.css",
        ]

    def test_created_used_when_no_modified(self):
        assert build_header_attributes({"created": "2024-01-01"}) == [":revdate: 2024-01-01"]

    def test_unknown_keys_ignored(self):
        assert build_header_attributes({"publish": "true", "title": "x"}) == []

    def test_attributes_precede_fixed_block(self):
        out = convert(make_doc("---\nauthor: Jane\n---\nBody", "n.md"), ConversionContext())
        assert out.startswith("= n\n:author: Jane\n:doctype: article\n")
        assert out.endswith("\n\nBody")

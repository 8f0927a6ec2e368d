"""Tests for the markdown -> AsciiDoc pipeline stages."""

from __future__ import annotations

from conftest import make_doc

from vaultdoc.transform import (
    ConversionContext,
    DocumentState,
    TransformPipeline,
    convert,
    map_unprotected,
    sanitize_name,
    xref_target,
)
from vaultdoc.transform.callouts import convert_callouts
from vaultdoc.transform.inline import (
    BlockquoteConverter,
    HorizontalRuleConverter,
    InlineCodeConverter,
)
from vaultdoc.transform.tables import convert_tables


def _body(result: str) -> str:
    """Strip the injected document header (title + attribute block)."""
    return result.split(":stem: latexmath\n\n", 1)[1]


def _convert_body(content: str, ctx=None) -> str:
    return _body(convert(make_doc(content), ctx or ConversionContext()))


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestTags:
    def test_tag_becomes_role_span(self):
        assert _convert_body("see #project/alpha now") == "see [.tag]#project/alpha# now"

    def test_numeric_and_inword_hashes_untouched(self):
        assert _convert_body("issue #123 and a#b") == "issue #123 and a#b"

    def test_tag_inside_code_fence_untouched(self):
        out = _convert_body("```\n#notatag\n```")
        assert "#notatag" in out
        assert "[.tag]" not in out

    def test_tag_inside_code_span_untouched(self):
        assert _convert_body("`x #define` and #real") == "`x #define` and [.tag]#real#"


# ---------------------------------------------------------------------------
# Callouts
# ---------------------------------------------------------------------------


class TestCallouts:
    def test_three_line_callout_with_title(self):
        lines = ["> [!warning] Careful", "> one", "> two", "> three", "after"]
        assert convert_callouts(lines) == [
            "[WARNING]", ".Careful", "====", "one", "two", "three", "====", "after",
        ]

    def test_collapsible_markers(self):
        folded = convert_callouts(["> [!note]- Hidden", "> body"])
        opened = convert_callouts(["> [!TIP]+", "> body"])
        assert "[%collapsible]" in folded
        assert "[%collapsible%open]" in opened
        assert opened[0] == "[TIP]"

    def test_block_closed_at_end_of_document(self):
        assert convert_callouts(["> [!important]", "> x"])[-1] == "===="

    def test_unknown_kind_is_plain_quote(self):
        out = _convert_body("> [!bogus] nope")
        assert out == "____\n[!bogus] nope\n____"


# ---------------------------------------------------------------------------
# Embeds, wikilinks, block references
# ---------------------------------------------------------------------------


class TestLinks:
    def test_image_embed(self):
        assert _convert_body("![[img/pic.png]]") == "image::img/pic.png[pic]"
        assert _convert_body("![[pic.png|A chart]]") == "image::pic.png[A chart]"

    def test_note_embed_becomes_include(self):
        assert _convert_body("![[sub/other.md]]") == "include::sub/other.adoc[]"
        assert _convert_body("![[Other]]") == "include::Other.adoc[]"

    def test_wikilink(self):
        assert _convert_body("[[My Note]]") == "xref:my-note.adoc[My Note]"
        assert _convert_body("[[My Note|alias]]") == "xref:my-note.adoc[alias]"

    def test_wikilink_with_section(self):
        assert _convert_body("[[Note#Some Section|go]]") == "xref:note.adoc#some-section[go]"

    def test_links_inside_code_spans_untouched(self):
        assert _convert_body("`[[note]]` vs [[note]]") == "`[[note]]` vs xref:note.adoc[note]"
        assert _convert_body("`![[pic.png]]`") == "`![[pic.png]]`"

    def test_block_anchor_and_reference(self):
        out = _convert_body("A claim ^abc123\n\nSee [[note#^abc123]]")
        assert "A claim [[block-abc123]]" in out
        assert "xref:note.adoc#block-abc123[note (Block)]" in out

    def test_sanitize_is_canonical_and_idempotent(self):
        once = sanitize_name("My  Big Note (v2)")
        assert once == "my-big-note-v2"
        assert sanitize_name(once) == once
        assert sanitize_name(sanitize_name(once)) == once

    def test_xref_target_strips_markdown_extension(self):
        assert xref_target("Daily Log.md") == "daily-log.adoc"


# ---------------------------------------------------------------------------
# Math, headers, emphasis
# ---------------------------------------------------------------------------


class TestMath:
    def test_block_math(self):
        assert _convert_body("$$\nE = mc^2\n$$") == "[stem]\n++++\nE = mc^2\n++++"

    def test_inline_math(self):
        assert _convert_body("area $a*b*c$ here") == "area latexmath:[a*b*c] here"


class TestHeadersAndEmphasis:
    def test_header_levels(self):
        assert _convert_body("# One\n### Three") == "= One\n=== Three"

    def test_hash_without_space_is_not_header(self):
        assert not _convert_body("#tag").startswith("=")

    def test_bold_is_not_reitalicized(self):
        assert _convert_body("**bold** and *it* and __also__") == "*bold* and _it_ and *also*"

    def test_emphasis_skips_code_spans(self):
        assert _convert_body("use `**kwargs` here") == "use `**kwargs` here"


# ---------------------------------------------------------------------------
# Code fences
# ---------------------------------------------------------------------------


class TestCodeFences:
    def test_source_block(self):
        assert _convert_body("```python\nprint(1)\n```") == "[source,python]\n----\nprint(1)\n----"

    def test_untagged_defaults_to_text(self):
        assert _convert_body("```\nplain\n```") == "[source,text]\n----\nplain\n----"

    def test_contents_untouched_by_prose_rules(self):
        out = _convert_body("```md\n# not a header\n**x** [a](b)\n- item\n```")
        assert "# not a header\n**x** [a](b)\n- item" in out

    def test_diagram_kept_as_source_by_default(self):
        out = _convert_body("```mermaid\ngraph TD;\n```")
        assert out == "[source,mermaid]\n----\ngraph TD;\n----"

    def test_diagram_rendered_when_enabled(self, render_ctx):
        out = _convert_body("```mermaid\ngraph TD;\n```", render_ctx)
        assert out == "[mermaid]\n....\ngraph TD;\n...."

    def test_unknown_language_with_rendering_enabled(self, render_ctx):
        out = _convert_body("```rust\nfn main() {}\n```", render_ctx)
        assert out.startswith("[source,rust]\n----")


# ---------------------------------------------------------------------------
# Lists, links, images, rules, quotes
# ---------------------------------------------------------------------------


class TestInlineRules:
    def test_lists(self):
        assert _convert_body("- a\n  - b\n1. c") == "* a\n** b\n. c"

    def test_links(self):
        assert _convert_body("[site](https://x.org)") == "https://x.org[site]"
        assert _convert_body("[doc](other.pdf)") == "link:other.pdf[doc]"

    def test_image_not_caught_by_link_rule(self):
        assert _convert_body("![alt](img/p.png)") == "image::img/p.png[alt]"

    def test_horizontal_rules(self):
        assert _convert_body("a\n\n***\n\nb") == "a\n\n'''\n\nb"
        assert _convert_body("a\n\n___\n\nb") == "a\n\n'''\n\nb"

    def test_blockquote(self):
        assert _convert_body("> quoted") == "____\nquoted\n____"

    def test_idempotent_when_applied_twice(self):
        pipeline = TransformPipeline([
            InlineCodeConverter(), HorizontalRuleConverter(), BlockquoteConverter(),
        ])
        state = DocumentState(document=make_doc(""), context=ConversionContext())
        once = pipeline.apply("> quote\n\n---\n\nuse `x`", state)
        assert pipeline.apply(once, state) == once


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestTables:
    def test_two_row_three_column_table(self):
        lines = ["| A | B | C |", "|---|:-:|---|", "| 1 | 2 | 3 |"]
        out = convert_tables(lines)
        assert out == ['[cols="1,1,1"]', "|===", "|*A* |*B* |*C*", "|1 |2 |3", "|==="]
        assert sum(1 for line in out if line.startswith("[cols=")) == 1

    def test_table_ends_at_first_non_row(self):
        out = convert_tables(["| A |", "| 1 |", "text"])
        assert out[-1] == "text"
        assert out.count("|===") == 2

    def test_table_through_pipeline(self):
        out = _convert_body("| A | B |\n|---|---|\n| 1 | 2 |")
        assert "|---" not in out
        assert out.startswith('[cols="1,1"]\n|===\n|*A* |*B*')


# ---------------------------------------------------------------------------
# Pipeline behavior
# ---------------------------------------------------------------------------


class TestPipeline:
    def test_map_unprotected_skips_fences(self):
        text = "a\n```\na\n```\na"
        assert map_unprotected(text, str.upper) == "A\n```\na\n```\nA"

    def test_document_header(self):
        out = convert(make_doc("Body", "dir/My Note.md"), ConversionContext())
        assert out.startswith("= My Note\n:doctype: article\n:toc: left\n")
        assert out.endswith(":stem: latexmath\n\nBody")

    def test_deterministic(self):
        doc = make_doc("---\ntags: [a]\n---\n# T\n\n**b** #x [[y]] $z$\n\n| a |\n|---|\n| b |")
        assert convert(doc, ConversionContext()) == convert(doc, ConversionContext())

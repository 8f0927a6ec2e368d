"""Markdown -> AsciiDoc conversion of one vault document."""

from __future__ import annotations

import logging
import time

from vaultdoc.vault.models import SourceDocument

from .callouts import CalloutConverter
from .code import CodeFenceConverter
from .frontmatter import DocumentHeader, FrontmatterExtractor
from .inline import (
    BlockquoteConverter,
    EmphasisConverter,
    HeaderConverter,
    HorizontalRuleConverter,
    ImageConverter,
    InlineCodeConverter,
    LinkConverter,
    ListConverter,
)
from .links import BlockReferenceConverter, EmbedConverter, WikilinkConverter
from .math import MathConverter
from .pipeline import ConversionContext, DocumentState, TransformPipeline
from .tables import TableConverter
from .tags import TagRewriter

logger = logging.getLogger(__name__)


def build_pipeline() -> TransformPipeline:
    """The stages in the order they must run. Later stages rely on earlier ones."""
    return TransformPipeline([
        FrontmatterExtractor(),
        TagRewriter(),
        CalloutConverter(),
        EmbedConverter(),
        WikilinkConverter(),
        BlockReferenceConverter(),
        MathConverter(),
        HeaderConverter(),
        EmphasisConverter(),
        CodeFenceConverter(),
        InlineCodeConverter(),
        ListConverter(),
        LinkConverter(),
        ImageConverter(),
        HorizontalRuleConverter(),
        BlockquoteConverter(),
        TableConverter(),
        DocumentHeader(),
    ])


_PIPELINE = build_pipeline()


def convert(doc: SourceDocument, ctx: ConversionContext | None = None) -> str:
    """Convert a markdown document to AsciiDoc. Deterministic for identical input and settings."""
    ctx = ctx or ConversionContext()
    state = DocumentState(document=doc, context=ctx)
    start = time.perf_counter()
    result = _PIPELINE.apply(doc.content, state)
    logger.debug(
        "Converted %s (%d -> %d chars) in %.1fms",
        doc.path, len(doc.content), len(result), (time.perf_counter() - start) * 1000,
    )
    return result

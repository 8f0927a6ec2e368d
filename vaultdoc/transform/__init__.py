"""Markdown -> AsciiDoc conversion pipeline."""

from vaultdoc.transform.converter import build_pipeline, convert
from vaultdoc.transform.links import sanitize_name, xref_target
from vaultdoc.transform.pipeline import (
    ConversionContext,
    DocumentState,
    Transform,
    TransformPipeline,
    map_unprotected,
)

__all__ = [
    "ConversionContext",
    "DocumentState",
    "Transform",
    "TransformPipeline",
    "build_pipeline",
    "convert",
    "map_unprotected",
    "sanitize_name",
    "xref_target",
]

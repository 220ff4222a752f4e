"""
Filing segmentation package.

This package provides tools for parsing SEC filing HTML, extracting the
inline XBRL header and segmenting the narrative into form items.
"""

from .errors import (
    EdgarPipelineError,
    ParseError,
    UnsupportedFormError,
)

from .models import (
    # Enums / types
    DocumentType,
    MetadataValue,
    # Filing models
    FilingMetadata,
    CompanyTicker,
    RawFiling,
    # Document models
    DocumentChunk,
    Document,
)

from .html_normalizer import (
    parse_html,
    strip_form_html,
)

from .ixbrl_header import (
    IX_HEADER,
    extract_xbrl_header,
)

from .document_segmenter import (
    FORM_10K_ITEM_PATTERN,
    DocumentSegmenter,
    ItemScanner,
    ScanState,
    iter_own_texts,
    own_text,
    scan_items,
    segment_document,
)

from .processor import (
    SUPPORTED_FORMS,
    TEN_K_FORM,
    FilingProcessor,
    build_filing_metadata,
    convert_filing,
)

__all__ = [
    # Errors
    "EdgarPipelineError",
    "ParseError",
    "UnsupportedFormError",
    # Enums / types
    "DocumentType",
    "MetadataValue",
    # Filing models
    "FilingMetadata",
    "CompanyTicker",
    "RawFiling",
    # Document models
    "DocumentChunk",
    "Document",
    # Normalizer
    "parse_html",
    "strip_form_html",
    # Header
    "IX_HEADER",
    "extract_xbrl_header",
    # Segmenter
    "FORM_10K_ITEM_PATTERN",
    "DocumentSegmenter",
    "ItemScanner",
    "ScanState",
    "iter_own_texts",
    "own_text",
    "scan_items",
    "segment_document",
    # Processor
    "SUPPORTED_FORMS",
    "TEN_K_FORM",
    "FilingProcessor",
    "build_filing_metadata",
    "convert_filing",
]

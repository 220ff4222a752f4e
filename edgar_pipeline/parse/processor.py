"""
Filing Processing Pipeline.

Orchestrates header extraction, HTML normalization and item segmentation
to turn one filing into a structured Document.
"""

import logging
import re
from datetime import datetime
from typing import Optional, Union

from .document_segmenter import FORM_10K_ITEM_PATTERN, DocumentSegmenter
from .errors import UnsupportedFormError
from .html_normalizer import parse_html, strip_form_html
from .ixbrl_header import extract_xbrl_header
from .models import (
    Document,
    DocumentChunk,
    DocumentType,
    FilingMetadata,
    MetadataValue,
    RawFiling,
)

logger = logging.getLogger(__name__)


TEN_K_FORM = "10-K"

# Form type -> item heading pattern (used as begin and end boundary)
FORM_ITEM_PATTERNS: dict[str, re.Pattern] = {
    TEN_K_FORM: FORM_10K_ITEM_PATTERN,
}
SUPPORTED_FORMS = frozenset(FORM_ITEM_PATTERNS)

# FilingMetadata field -> chunk metadata key
FILING_METADATA_KEYS = {
    "cik": "cik",
    "name": "companyName",
    "accession_number": "accessionNumber",
    "filing_date": "filingDate",
    "report_date": "reportDate",
    "form": "form",
    "primary_document": "primaryDocument",
}


def build_filing_metadata(metadata: FilingMetadata) -> dict[str, MetadataValue]:
    """
    Build the metadata shared by every chunk of a filing.

    Fields that are not set are left out.
    """
    result = {}
    for field_name, key in FILING_METADATA_KEYS.items():
        value = getattr(metadata, field_name)
        if value is not None:
            result[key] = value
    return result


class FilingProcessor:
    """
    Main processor for SEC filings.

    Runs the full conversion:
    1. Parse the raw HTML
    2. Extract the inline XBRL header (before any stripping)
    3. Strip styles, colspans, empty elements and links
    4. Segment the remaining text into form items
    5. Assemble the Document, header chunk first
    """

    def __init__(self, form_patterns: Optional[dict[str, re.Pattern]] = None):
        """
        Initialize processor.

        Args:
            form_patterns: Form type -> item pattern. Defaults to FORM_ITEM_PATTERNS.
        """
        self.form_patterns = dict(form_patterns or FORM_ITEM_PATTERNS)

    @property
    def supported_forms(self) -> frozenset:
        return frozenset(self.form_patterns)

    def convert(self, raw_filing: RawFiling) -> Document:
        """
        Convert a downloaded filing into a Document.

        The content stream is not touched if the form is unsupported.

        Raises:
            UnsupportedFormError: If the filing's form has no item pattern
            ParseError: If the content cannot be decoded
        """
        self.check_form(raw_filing.metadata)
        return self._convert(raw_filing.read(), raw_filing.metadata, raw_filing.encoding)

    def convert_html(
        self,
        html: Union[bytes, str],
        metadata: FilingMetadata,
        encoding: str = "utf-8",
    ) -> Document:
        """Convert already-buffered filing markup into a Document."""
        self.check_form(metadata)
        return self._convert(html, metadata, encoding)

    def check_form(self, metadata: FilingMetadata) -> None:
        """Raise UnsupportedFormError if the filing's form has no item pattern."""
        if metadata.form not in self.form_patterns:
            raise UnsupportedFormError(metadata.form, self.supported_forms)

    def _convert(
        self,
        html: Union[bytes, str],
        metadata: FilingMetadata,
        encoding: str,
    ) -> Document:
        logger.info(f"Processing {metadata.form} {metadata.accession_number} ({metadata.name})")
        start_time = datetime.now()

        soup = parse_html(html, encoding)
        base_metadata = build_filing_metadata(metadata)

        # Step 1: Header comes out before stripping so it keeps its markup
        xbrl = extract_xbrl_header(soup)
        logger.info(f"  Step 1: Extracted XBRL header ({len(xbrl):,} bytes)")

        # Step 2: Normalize
        strip_form_html(soup)
        logger.info("  Step 2: Stripped form HTML")

        # Step 3: Segment
        pattern = self.form_patterns[metadata.form]
        items = DocumentSegmenter(pattern, pattern).segment(soup, base_metadata)
        logger.info(f"  Step 3: Found {len(items)} form items")

        header_chunk = self._header_chunk(xbrl, base_metadata)

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(f"  Completed in {elapsed:.2f}s")

        return Document(
            header_chunk=header_chunk,
            chunks=(header_chunk, *items),
            metadata=base_metadata,
        )

    def _header_chunk(self, xbrl: bytes, base_metadata: dict) -> DocumentChunk:
        header_metadata = dict(base_metadata)
        header_metadata["documentType"] = DocumentType.XBRL_HEADER.value
        return DocumentChunk(xbrl.decode("utf-8"), header_metadata)


def convert_filing(raw_filing: RawFiling) -> Document:
    """
    Convenience function to convert a filing with the default processor.

    Args:
        raw_filing: Downloaded filing

    Returns:
        Segmented Document
    """
    return FilingProcessor().convert(raw_filing)

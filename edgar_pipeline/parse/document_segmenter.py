"""
Document Segmenter for SEC filings.

Splits a cleaned filing into its "Item" sections (Item 1. Business,
Item 1A. Risk Factors, ...). Every element of the tree is visited in
document order; an element whose own text is a heading line opens a new
item, and everything up to the next heading becomes that item's content.
"""

import logging
import re
from enum import Enum
from typing import Iterable, Iterator, Mapping, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString, Script, Stylesheet

from .models import DocumentChunk, DocumentType, MetadataValue

logger = logging.getLogger(__name__)


# "Item 7A. Quantitative and Qualitative Disclosures About Market Risk"
# The title class is kept narrow so prose like "see Item 7, which ..."
# never opens an item. Titles with typographic quotes or "&" are missed.
FORM_10K_ITEM_REGEX = r"^Item\s+[0-9][0-9]?[A-C]?.?\s+[a-z\[\]'\"´`,;: A-Z-]+\s*$"
FORM_10K_ITEM_PATTERN = re.compile(FORM_10K_ITEM_REGEX)

# Comments, doctypes, CDATA, <script> and <style> bodies are not text
_NON_TEXT_STRINGS = (PreformattedString, Script, Stylesheet)

_WHITESPACE_RE = re.compile(r"\s+")


def own_text(elem: Tag) -> str:
    """
    Text directly contained by an element, whitespace-collapsed and trimmed.

    Text of descendant elements is not included.
    """
    parts = [
        str(child)
        for child in elem.children
        if isinstance(child, NavigableString) and not isinstance(child, _NON_TEXT_STRINGS)
    ]
    return _WHITESPACE_RE.sub(" ", "".join(parts)).strip()


def iter_own_texts(soup: Union[BeautifulSoup, Tag]) -> Iterator[str]:
    """Yield the own text of the root and every element below it, in document order."""
    yield own_text(soup)
    for elem in soup.descendants:
        if isinstance(elem, Tag):
            yield own_text(elem)


class ScanState(str, Enum):
    """Segmenter state."""
    NOT_IN_ITEM = "not_in_item"
    IN_ITEM = "in_item"


class ItemScanner:
    """
    Two-state fold over a sequence of own texts.

    feed() is called once per element in document order; finish() closes
    an item still open at the end of the document and returns all chunks.
    Begin and end boundaries must match the whole text.
    """

    def __init__(
        self,
        begin_pattern: re.Pattern,
        end_pattern: Optional[re.Pattern] = None,
        base_metadata: Optional[Mapping[str, MetadataValue]] = None,
    ):
        self.begin_pattern = begin_pattern
        self.end_pattern = end_pattern if end_pattern is not None else begin_pattern
        self.base_metadata = dict(base_metadata or {})

        self.state = ScanState.NOT_IN_ITEM
        self.item_index = 0
        self.item_title: Optional[str] = None
        self.chunks: list[DocumentChunk] = []
        self._content: list[str] = []

    def feed(self, text: str) -> None:
        """Advance the scan by one element."""
        if self.state == ScanState.IN_ITEM and self.end_pattern.fullmatch(text):
            self._emit()
            self.item_index += 1
            self._content = []
            self.item_title = None
            self.state = ScanState.NOT_IN_ITEM

        if self.begin_pattern.fullmatch(text):
            if self.state == ScanState.IN_ITEM:
                logger.debug(f"Discarding unterminated item {self.item_title!r}")
            self.item_title = text.strip()
            self._content = []
            self.state = ScanState.IN_ITEM

        if self.state == ScanState.IN_ITEM:
            self._content.append(" ")
            self._content.append(text)

    def finish(self) -> list[DocumentChunk]:
        """Close a trailing item without an end boundary and return all chunks."""
        if self.state == ScanState.IN_ITEM and self._content:
            self._emit()
            self._content = []
            self.state = ScanState.NOT_IN_ITEM
        return self.chunks

    def _emit(self) -> None:
        metadata = dict(self.base_metadata)
        metadata["documentType"] = DocumentType.FORM_ITEM.value
        metadata["itemIndex"] = self.item_index
        metadata["itemTitle"] = self.item_title
        self.chunks.append(DocumentChunk("".join(self._content).strip(), metadata))


def scan_items(
    texts: Iterable[str],
    begin_pattern: re.Pattern,
    end_pattern: Optional[re.Pattern] = None,
    base_metadata: Optional[Mapping[str, MetadataValue]] = None,
) -> list[DocumentChunk]:
    """
    Segment a sequence of own texts into form item chunks.

    Args:
        texts: Own text of each element, in document order
        begin_pattern: Heading pattern that opens an item
        end_pattern: Heading pattern that closes an item (defaults to begin_pattern)
        base_metadata: Metadata copied into every chunk

    Returns:
        FORM_ITEM chunks in the order their headings appear
    """
    scanner = ItemScanner(begin_pattern, end_pattern, base_metadata)
    for text in texts:
        scanner.feed(text)
    return scanner.finish()


class DocumentSegmenter:
    """Segments a cleaned filing tree into form items."""

    def __init__(
        self,
        begin_pattern: re.Pattern = FORM_10K_ITEM_PATTERN,
        end_pattern: Optional[re.Pattern] = None,
    ):
        self.begin_pattern = begin_pattern
        self.end_pattern = end_pattern

    def segment(
        self,
        soup: Union[BeautifulSoup, Tag],
        base_metadata: Optional[Mapping[str, MetadataValue]] = None,
    ) -> list[DocumentChunk]:
        """
        Segment a filing tree.

        Args:
            soup: Filing tree, normally already passed through strip_form_html()
            base_metadata: Metadata copied into every chunk

        Returns:
            FORM_ITEM chunks with itemIndex 0..N-1
        """
        chunks = scan_items(
            iter_own_texts(soup),
            self.begin_pattern,
            self.end_pattern,
            base_metadata,
        )
        logger.debug(f"Segmented {len(chunks)} item(s)")
        return chunks


def segment_document(
    soup: Union[BeautifulSoup, Tag],
    begin_pattern: re.Pattern = FORM_10K_ITEM_PATTERN,
    end_pattern: Optional[re.Pattern] = None,
    base_metadata: Optional[Mapping[str, MetadataValue]] = None,
) -> list[DocumentChunk]:
    """
    Convenience function to segment a filing tree.

    Args:
        soup: Filing tree
        begin_pattern: Heading pattern that opens an item
        end_pattern: Heading pattern that closes an item (defaults to begin_pattern)
        base_metadata: Metadata copied into every chunk

    Returns:
        FORM_ITEM chunks
    """
    segmenter = DocumentSegmenter(begin_pattern, end_pattern)
    return segmenter.segment(soup, base_metadata)

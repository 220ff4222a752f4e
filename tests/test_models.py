"""
Tests for filing and document models.

Tests cover:
1. FilingMetadata construction from submissions-style keys
2. RawFiling single-read content stream
3. DocumentChunk metadata filtering and immutability
4. Document chunk ordering and serialization
"""

import dataclasses

import pytest

from edgar_pipeline.parse.models import (
    CompanyTicker,
    Document,
    DocumentChunk,
    DocumentType,
    FilingMetadata,
    RawFiling,
)


class TestFilingMetadata:
    """Tests for FilingMetadata model."""

    def test_validate_from_aliases(self):
        """Test that submissions JSON keys populate the fields."""
        metadata = FilingMetadata.model_validate({
            "cik": "320193",
            "accessionNumber": "0000320193-23-000106",
            "filingDate": "2023-11-03",
            "form": "10-K",
            "isXBRL": True,
            "primaryDocument": "aapl-20230930.htm",
        })

        assert metadata.accession_number == "0000320193-23-000106"
        assert metadata.filing_date == "2023-11-03"
        assert metadata.is_xbrl is True
        assert metadata.is_inline_xbrl is False
        assert metadata.primary_document == "aapl-20230930.htm"

    def test_populate_by_field_name(self):
        """Test that Python field names are accepted too."""
        metadata = FilingMetadata(cik="320193", accession_number="0000320193-23-000106")
        assert metadata.key == ("320193", "0000320193-23-000106")

    def test_is_frozen(self):
        """Test that metadata cannot be changed after creation."""
        metadata = FilingMetadata(form="10-K")
        with pytest.raises(Exception):
            metadata.form = "10-Q"

    def test_ticker_exchange_optional(self):
        """Test CompanyTicker without exchange."""
        ticker = CompanyTicker(cik="320193", name="Apple Inc.", ticker="AAPL")
        assert ticker.exchange is None


class TestRawFiling:
    """Tests for RawFiling content stream."""

    def test_read_bytes(self):
        """Test reading bytes content."""
        raw = RawFiling(metadata=FilingMetadata(form="10-K"), content=b"<html></html>")

        assert raw.consumed is False
        assert raw.read() == b"<html></html>"
        assert raw.consumed is True

    def test_read_twice_fails(self):
        """Test that content can only be consumed once."""
        raw = RawFiling(metadata=FilingMetadata(form="10-K"), content=b"x")
        raw.read()

        with pytest.raises(ValueError, match="already consumed"):
            raw.read()


class TestDocumentChunk:
    """Tests for DocumentChunk value semantics."""

    def test_null_keys_and_values_dropped(self):
        """Test that None keys and values are filtered on construction."""
        chunk = DocumentChunk("text", {"cik": "320193", "reportDate": None, None: "x"})

        assert dict(chunk.metadata) == {"cik": "320193"}

    def test_metadata_is_read_only(self):
        """Test that chunk metadata cannot be mutated."""
        chunk = DocumentChunk("text", {"itemIndex": 0})

        with pytest.raises(TypeError):
            chunk.metadata["itemIndex"] = 1

    def test_metadata_copied_from_source(self):
        """Test that later changes to the source dict do not leak in."""
        source = {"itemIndex": 0}
        chunk = DocumentChunk("text", source)
        source["itemIndex"] = 5

        assert chunk.metadata["itemIndex"] == 0

    def test_chunk_is_frozen(self):
        """Test that chunk fields cannot be reassigned."""
        chunk = DocumentChunk("text")
        with pytest.raises(dataclasses.FrozenInstanceError):
            chunk.content = "other"

    def test_value_kinds(self):
        """Test that strings, ints and bools are accepted, enums are unwrapped."""
        chunk = DocumentChunk("text", {
            "itemTitle": "Item 1. Business",
            "itemIndex": 2,
            "isXBRL": True,
            "documentType": DocumentType.FORM_ITEM,
        })

        assert chunk.metadata["documentType"] == "FORM_ITEM"
        assert chunk.document_type == "FORM_ITEM"
        assert chunk.metadata["isXBRL"] is True

    def test_unsupported_value_kind(self):
        """Test that other value types are rejected."""
        with pytest.raises(TypeError, match="score"):
            DocumentChunk("text", {"score": 0.5})

    def test_equality(self):
        """Test that chunks compare by value."""
        a = DocumentChunk("text", {"itemIndex": 0})
        b = DocumentChunk("text", {"itemIndex": 0})
        assert a == b


class TestDocument:
    """Tests for Document model."""

    def test_none_chunks_filtered(self):
        """Test that missing chunks never appear in the result."""
        header = DocumentChunk("", {"documentType": "XBRL_HEADER"})
        item = DocumentChunk("Item 1. Business", {"documentType": "FORM_ITEM", "itemIndex": 0})

        document = Document(header_chunk=header, chunks=[header, None, item])

        assert document.chunks == (header, item)
        assert document.items == [item]

    def test_to_dict(self):
        """Test JSON-friendly conversion."""
        header = DocumentChunk("<ix:hidden/>", {"documentType": "XBRL_HEADER"})
        document = Document(header_chunk=header, chunks=(header,), metadata={"cik": "1"})

        data = document.to_dict()

        assert data["metadata"] == {"cik": "1"}
        assert data["header_chunk"]["content"] == "<ix:hidden/>"
        assert data["chunks"][0]["metadata"] == {"documentType": "XBRL_HEADER"}

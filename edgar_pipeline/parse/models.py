"""
Data models for filing metadata and segmented documents.
"""

import io
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import BinaryIO, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Chunk metadata is limited to these three value kinds
MetadataValue = Union[str, int, bool]


class DocumentType(str, Enum):
    """Kind of content held by a document chunk."""
    XBRL_HEADER = "XBRL_HEADER"    # Inline XBRL header markup
    FORM_ITEM = "FORM_ITEM"        # Narrative "Item N." section


# =============================================================================
# Filing Metadata Models
# =============================================================================

class FilingMetadata(BaseModel):
    """
    Metadata for one filing, as listed in the SEC submissions feed.

    Field aliases follow the submissions JSON keys so rows can be
    validated directly. Identity is (cik, accession_number).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cik: Optional[str] = None
    name: Optional[str] = None                       # Company name
    accession_number: Optional[str] = Field(default=None, alias="accessionNumber")
    filing_date: Optional[str] = Field(default=None, alias="filingDate")
    report_date: Optional[str] = Field(default=None, alias="reportDate")
    acceptance_date_time: Optional[str] = Field(default=None, alias="acceptanceDateTime")
    act: Optional[str] = None
    form: Optional[str] = None                       # e.g., "10-K"
    file_number: Optional[str] = Field(default=None, alias="fileNumber")
    film_number: Optional[str] = Field(default=None, alias="filmNumber")
    items: Optional[str] = None
    core_type: Optional[str] = None
    size: Optional[int] = None                       # Bytes
    is_xbrl: bool = Field(default=False, alias="isXBRL")
    is_inline_xbrl: bool = Field(default=False, alias="isInlineXBRL")
    primary_document: Optional[str] = Field(default=None, alias="primaryDocument")
    primary_doc_description: Optional[str] = Field(default=None, alias="primaryDocDescription")

    @property
    def key(self) -> tuple[Optional[str], Optional[str]]:
        """Unique key for this filing."""
        return (self.cik, self.accession_number)


class CompanyTicker(BaseModel):
    """One row of the SEC company ticker directory."""
    model_config = ConfigDict(frozen=True)

    cik: str
    name: str
    ticker: str
    exchange: Optional[str] = None


@dataclass
class RawFiling:
    """
    A downloaded filing whose content has not been decoded yet.

    The content stream can be read exactly once.
    """
    metadata: FilingMetadata
    content: Union[bytes, BinaryIO]
    encoding: str = "utf-8"
    _consumed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        if isinstance(self.content, (bytes, bytearray)):
            self.content = io.BytesIO(bytes(self.content))

    @property
    def consumed(self) -> bool:
        return self._consumed

    def read(self) -> bytes:
        """Read the whole content stream."""
        if self._consumed:
            raise ValueError(
                f"Content of filing {self.metadata.accession_number} was already consumed"
            )
        self._consumed = True
        return self.content.read()


# =============================================================================
# Document Models
# =============================================================================

def _freeze_metadata(metadata: Optional[Mapping]) -> Mapping[str, MetadataValue]:
    """Drop null keys/values and return a read-only copy."""
    if not metadata:
        return MappingProxyType({})

    frozen = {}
    for key, value in metadata.items():
        if key is None or value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(value, (str, int)):
            raise TypeError(
                f"Unsupported metadata value for {key!r}: {type(value).__name__}"
            )
        frozen[str(key)] = value
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class DocumentChunk:
    """A piece of content extracted from a filing, with its metadata."""
    content: str
    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "metadata", _freeze_metadata(self.metadata))

    @property
    def document_type(self) -> Optional[str]:
        return self.metadata.get("documentType")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"content": self.content, "metadata": dict(self.metadata)}


@dataclass(frozen=True)
class Document:
    """
    A segmented filing.

    chunks holds the header chunk first, followed by the form items in
    the order they were detected.
    """
    header_chunk: Optional[DocumentChunk] = None
    chunks: tuple[DocumentChunk, ...] = ()
    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)

    def __post_init__(self):
        chunks = tuple(c for c in (self.chunks or ()) if c is not None)
        object.__setattr__(self, "chunks", chunks)
        object.__setattr__(self, "metadata", _freeze_metadata(self.metadata))

    @property
    def items(self) -> list[DocumentChunk]:
        """Form item chunks only."""
        return [c for c in self.chunks if c.document_type == DocumentType.FORM_ITEM.value]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": dict(self.metadata),
            "header_chunk": self.header_chunk.to_dict() if self.header_chunk else None,
            "chunks": [c.to_dict() for c in self.chunks],
        }

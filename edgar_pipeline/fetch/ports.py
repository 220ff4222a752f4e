"""
Interfaces between the pipeline and the SEC EDGAR archive.

The segmentation core only consumes RawFiling objects; these ports
describe where they come from.
"""

from abc import ABC, abstractmethod

from ..parse.models import CompanyTicker, FilingMetadata, RawFiling


class FilingDirectory(ABC):
    """Port for the company directory and submission lists."""

    @abstractmethod
    def get_company_tickers(self) -> list[CompanyTicker]:
        """List all companies with their tickers."""
        pass

    @abstractmethod
    def list_filings(self, cik: str) -> list[FilingMetadata]:
        """List a company's filings, most recent first."""
        pass


class FilingFetcher(ABC):
    """Port for downloading filing documents."""

    @abstractmethod
    def fetch(self, metadata: FilingMetadata) -> RawFiling:
        """Download a filing's primary document."""
        pass

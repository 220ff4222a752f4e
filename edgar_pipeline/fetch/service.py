"""
High-level EDGAR service.

Connects the filing directory and fetcher with the FilingProcessor so a
caller can go from a ticker symbol to a segmented Document in one call.
"""

import logging
from typing import Optional

from ..config import PipelineConfig
from ..parse.errors import EdgarPipelineError
from ..parse.models import CompanyTicker, Document, FilingMetadata
from ..parse.processor import TEN_K_FORM, FilingProcessor
from .client import EdgarClient
from .ports import FilingDirectory, FilingFetcher

logger = logging.getLogger(__name__)


class TickerNotFoundError(EdgarPipelineError, LookupError):
    """No company in the SEC directory trades under the given ticker."""

    def __init__(self, ticker: str):
        self.ticker = ticker
        super().__init__(f"Ticker not found: {ticker}")


class FilingNotFoundError(EdgarPipelineError, LookupError):
    """No filing matched the requested selection."""


class EdgarService:
    """
    Orchestrates EDGAR lookups, downloads and segmentation.

    Example:
        service = EdgarService.from_config(load_config())
        document = service.load_latest_10k_for_ticker("AAPL")
        for chunk in document.items:
            print(chunk.metadata["itemTitle"])
    """

    def __init__(
        self,
        directory: FilingDirectory,
        fetcher: FilingFetcher,
        processor: Optional[FilingProcessor] = None,
    ):
        self.directory = directory
        self.fetcher = fetcher
        self.processor = processor or FilingProcessor()

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "EdgarService":
        """Create a service backed by a live EdgarClient."""
        client = EdgarClient.from_config(config.edgar, encoding=config.parse.encoding)
        return cls(directory=client, fetcher=client)

    # =========================================================================
    # Directory lookups
    # =========================================================================

    def get_tickers(self) -> list[CompanyTicker]:
        """Get all available company tickers."""
        return self.directory.get_company_tickers()

    def find_ticker(self, ticker: str) -> CompanyTicker:
        """
        Look up a company by ticker symbol (case-insensitive).

        Raises:
            TickerNotFoundError: If no company uses the ticker
        """
        wanted = ticker.strip().upper()
        for company in self.get_tickers():
            if company.ticker.upper() == wanted:
                return company
        raise TickerNotFoundError(ticker)

    def get_filings_by_cik(self, cik: str) -> list[FilingMetadata]:
        """Get all recent filings for a company by CIK."""
        return self.directory.list_filings(cik)

    def get_filings_by_ticker(self, ticker: str) -> list[FilingMetadata]:
        """Get all recent filings for a company by ticker."""
        company = self.find_ticker(ticker)
        logger.info(f"Resolved {ticker} to CIK {company.cik} ({company.name})")
        return self.get_filings_by_cik(company.cik)

    def get_10k_filings_by_ticker(self, ticker: str) -> list[FilingMetadata]:
        """Get 10-K filings for a company by ticker, most recent first."""
        return [f for f in self.get_filings_by_ticker(ticker) if f.form == TEN_K_FORM]

    # =========================================================================
    # Download and parse
    # =========================================================================

    def load_latest_10k_for_ticker(self, ticker: str) -> Document:
        """
        Download and segment the most recent 10-K for a ticker.

        Raises:
            TickerNotFoundError: If the ticker is unknown
            FilingNotFoundError: If the company has no 10-K on file
        """
        filings = self.get_10k_filings_by_ticker(ticker)
        if not filings:
            raise FilingNotFoundError(f"No {TEN_K_FORM} filings found for {ticker}")
        return self.download_and_parse_filing(filings[0])

    def load_10k_by_cik_and_accession_number(self, cik: str, accession_number: str) -> Document:
        """
        Download and segment a specific 10-K.

        Raises:
            FilingNotFoundError: If no 10-K with that accession number is listed
        """
        for filing in self.get_filings_by_cik(cik):
            if filing.accession_number == accession_number and filing.form == TEN_K_FORM:
                return self.download_and_parse_filing(filing)
        raise FilingNotFoundError(
            f"No {TEN_K_FORM} filing {accession_number} found for CIK {cik}"
        )

    def download_and_parse_filing(self, metadata: FilingMetadata) -> Document:
        """
        Download any filing by its metadata and segment it.

        The form is checked before downloading, so unsupported forms never
        hit the network.
        """
        self.processor.check_form(metadata)
        raw_filing = self.fetcher.fetch(metadata)
        return self.processor.convert(raw_filing)

"""
SEC EDGAR access.

Directory lookups, filing downloads and the service that hands downloaded
filings to the segmentation pipeline.
"""

from .ports import (
    FilingDirectory,
    FilingFetcher,
)

from .client import (
    SEC_BASE_URL,
    SEC_DATA_URL,
    EdgarClient,
    EdgarRequestError,
    EdgarResponseError,
    filing_document_url,
    pad_cik,
    parse_company_tickers,
    parse_submissions,
    strip_cik,
)

from .service import (
    EdgarService,
    FilingNotFoundError,
    TickerNotFoundError,
)

__all__ = [
    # Ports
    "FilingDirectory",
    "FilingFetcher",
    # Client
    "SEC_BASE_URL",
    "SEC_DATA_URL",
    "EdgarClient",
    "EdgarRequestError",
    "EdgarResponseError",
    "filing_document_url",
    "pad_cik",
    "parse_company_tickers",
    "parse_submissions",
    "strip_cik",
    # Service
    "EdgarService",
    "FilingNotFoundError",
    "TickerNotFoundError",
]

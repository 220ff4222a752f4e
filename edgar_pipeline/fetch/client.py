"""
SEC EDGAR API client.

Interfaces with the SEC's public EDGAR endpoints to list companies,
list their filings and download filing documents.
No API key required - uses SEC's public endpoints.

Rate Limits:
- SEC requests max 10 requests/second
- A User-Agent with contact information is mandatory

Endpoints used:
- Ticker directory: https://www.sec.gov/files/company_tickers_exchange.json
- Company submissions: https://data.sec.gov/submissions/CIK{cik}.json
- Filing documents: https://www.sec.gov/Archives/edgar/data/{cik}/{accession}/{document}
"""

import logging
import re
import time
from typing import Any, Optional

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import EdgarConfig
from ..parse.errors import EdgarPipelineError
from ..parse.models import CompanyTicker, FilingMetadata, RawFiling
from .ports import FilingDirectory, FilingFetcher

logger = logging.getLogger(__name__)


# SEC API constants
SEC_BASE_URL = "https://www.sec.gov"
SEC_DATA_URL = "https://data.sec.gov"
TICKER_FILE_PATH = "/files/company_tickers_exchange.json"

RETRY_STATUS_CODES = [429, 500, 502, 503, 504]

# Submissions JSON column -> FilingMetadata field
SUBMISSION_COLUMNS = {
    "accessionNumber": "accession_number",
    "filingDate": "filing_date",
    "reportDate": "report_date",
    "acceptanceDateTime": "acceptance_date_time",
    "act": "act",
    "form": "form",
    "fileNumber": "file_number",
    "filmNumber": "film_number",
    "items": "items",
    "core_type": "core_type",
    "size": "size",
    "isXBRL": "is_xbrl",
    "isInlineXBRL": "is_inline_xbrl",
    "primaryDocument": "primary_document",
    "primaryDocDescription": "primary_doc_description",
}


class EdgarRequestError(EdgarPipelineError):
    """An HTTP request to SEC EDGAR failed."""


class EdgarResponseError(EdgarPipelineError):
    """SEC EDGAR returned a payload that could not be interpreted."""


def pad_cik(cik: str) -> str:
    """Zero-pad a CIK to the 10 digits used by the submissions API."""
    return str(cik).strip().zfill(10)


def strip_cik(cik: str) -> str:
    """Remove leading zeros from a CIK, as used in archive paths."""
    return re.sub(r"^0+(?!$)", "", str(cik).strip())


def filing_document_url(metadata: FilingMetadata) -> str:
    """Archive URL of a filing's primary document."""
    if not (metadata.cik and metadata.accession_number and metadata.primary_document):
        raise ValueError(
            "cik, accession_number and primary_document are required to locate a filing"
        )
    accession = metadata.accession_number.replace("-", "")
    return (
        f"{SEC_BASE_URL}/Archives/edgar/data/"
        f"{strip_cik(metadata.cik)}/{accession}/{metadata.primary_document}"
    )


def parse_company_tickers(payload: dict[str, Any]) -> list[CompanyTicker]:
    """
    Parse the ticker directory file.

    The file is CSV in JSON clothing: a "fields" header row and a "data"
    list of positional rows, e.g. [320193, "Apple Inc.", "AAPL", "Nasdaq"].
    """
    try:
        fields = payload.get("fields") or ["cik", "name", "ticker", "exchange"]
        rows = payload["data"]
        tickers = []
        for row in rows:
            record = dict(zip(fields, row))
            tickers.append(CompanyTicker(
                cik=str(record["cik"]),
                name=str(record["name"]),
                ticker=str(record["ticker"]),
                exchange=record.get("exchange"),
            ))
        return tickers
    except (AttributeError, KeyError, TypeError, ValidationError) as e:
        raise EdgarResponseError(f"Failed to parse company tickers response: {e}") from e


def parse_submissions(payload: dict[str, Any]) -> list[FilingMetadata]:
    """
    Parse a company submissions response into filing metadata.

    The recent filings block stores one array per column; row i of every
    column describes filing i.
    """
    try:
        cik = str(payload["cik"])
        name = payload.get("name")
        recent = payload.get("filings", {}).get("recent", {})

        columns = {
            field_name: recent.get(column) or []
            for column, field_name in SUBMISSION_COLUMNS.items()
        }
        count = len(columns["accession_number"])

        filings = []
        for i in range(count):
            row = {
                field_name: values[i] if i < len(values) else None
                for field_name, values in columns.items()
            }
            row["is_xbrl"] = bool(row["is_xbrl"])
            row["is_inline_xbrl"] = bool(row["is_inline_xbrl"])
            filings.append(FilingMetadata(cik=cik, name=name, **row))
        return filings
    except (AttributeError, KeyError, TypeError, ValidationError) as e:
        raise EdgarResponseError(f"Failed to parse SEC filing response: {e}") from e


class EdgarClient(FilingDirectory, FilingFetcher):
    """
    SEC EDGAR client for listing and downloading filings.

    Uses a requests session with automatic retries on throttling and
    server errors, and spaces requests out to stay under SEC's limit.
    """

    def __init__(
        self,
        user_agent: str = EdgarConfig().user_agent,
        timeout: float = 30.0,
        retries: int = 3,
        backoff_factor: float = 0.5,
        request_interval: float = 0.15,
        encoding: str = "utf-8",
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize EDGAR client.

        Args:
            user_agent: Required User-Agent header (SEC requires valid contact info)
            timeout: Request timeout in seconds
            retries: Number of retry attempts
            backoff_factor: Exponential backoff factor between retries
            request_interval: Minimum seconds between requests
            encoding: Charset assumed for downloaded documents
            session: Pre-built session (mainly for tests)
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self.retries = retries
        self.backoff_factor = backoff_factor
        self.request_interval = request_interval
        self.encoding = encoding
        self.session = session or self._create_session()
        self._last_request_time = 0.0

    @classmethod
    def from_config(cls, config: EdgarConfig, encoding: str = "utf-8") -> "EdgarClient":
        """Create a client from an EdgarConfig."""
        return cls(
            user_agent=config.user_agent,
            timeout=config.timeout,
            retries=config.retries,
            backoff_factor=config.backoff_factor,
            request_interval=config.request_interval,
            encoding=encoding,
        )

    def _create_session(self) -> requests.Session:
        """Create session with retry configuration."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=RETRY_STATUS_CODES,
            allowed_methods=["GET", "HEAD"],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            "User-Agent": self.user_agent,
            "Accept-Encoding": "gzip, deflate",
            "Accept-Charset": "UTF-8",
        })

        return session

    def _rate_limit(self) -> None:
        """Enforce rate limiting between SEC requests."""
        elapsed = time.monotonic() - self._last_request_time
        if elapsed < self.request_interval:
            time.sleep(self.request_interval - elapsed)
        self._last_request_time = time.monotonic()

    def _get(self, url: str) -> requests.Response:
        """Make rate-limited GET request."""
        self._rate_limit()
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise EdgarRequestError(f"Request to {url} failed: {e}") from e
        return response

    def _get_json(self, url: str) -> dict[str, Any]:
        response = self._get(url)
        try:
            return response.json()
        except ValueError as e:
            raise EdgarResponseError(f"Invalid JSON from {url}: {e}") from e

    def get_company_tickers(self) -> list[CompanyTicker]:
        """Retrieve all company tickers from SEC."""
        logger.info("Fetching company tickers...")
        tickers = parse_company_tickers(self._get_json(SEC_BASE_URL + TICKER_FILE_PATH))
        logger.info(f"Loaded {len(tickers):,} tickers")
        return tickers

    def list_filings(self, cik: str) -> list[FilingMetadata]:
        """
        Retrieve recent filings for a company.

        Args:
            cik: Company CIK, with or without leading zeros

        Returns:
            Filing metadata, most recent first
        """
        url = f"{SEC_DATA_URL}/submissions/CIK{pad_cik(cik)}.json"
        filings = parse_submissions(self._get_json(url))
        logger.info(f"Found {len(filings)} filings for CIK {cik}")
        return filings

    def fetch(self, metadata: FilingMetadata) -> RawFiling:
        """Download a filing's primary document."""
        url = filing_document_url(metadata)
        logger.info(f"Downloading {metadata.form} {metadata.accession_number} from {url}")
        response = self._get(url)
        return RawFiling(metadata=metadata, content=response.content, encoding=self.encoding)

"""
Tests for EdgarService selection and orchestration logic.

Uses in-memory directory and fetcher implementations of the ports.
"""

import pytest

from edgar_pipeline.config import PipelineConfig
from edgar_pipeline.fetch.client import EdgarClient
from edgar_pipeline.fetch.ports import FilingDirectory, FilingFetcher
from edgar_pipeline.fetch.service import EdgarService, FilingNotFoundError, TickerNotFoundError
from edgar_pipeline.parse.errors import UnsupportedFormError
from edgar_pipeline.parse.models import CompanyTicker, FilingMetadata, RawFiling


FILING_HTML = b"""
<html><body>
<ix:header><ix:hidden>facts</ix:hidden></ix:header>
<p>Item 1. Business</p><p>Widgets.</p>
<p>Item 2. Properties</p><p>A plant.</p>
</body></html>
"""

TICKERS = [
    CompanyTicker(cik="320193", name="Apple Inc.", ticker="AAPL", exchange="Nasdaq"),
    CompanyTicker(cik="789019", name="MICROSOFT CORP", ticker="MSFT", exchange="Nasdaq"),
]


def filing(accession: str, form: str, cik: str = "320193") -> FilingMetadata:
    return FilingMetadata(
        cik=cik,
        name="Apple Inc.",
        accession_number=accession,
        form=form,
        primary_document=f"{accession}.htm",
    )


FILINGS = {
    "320193": [
        filing("0000320193-24-000010", "8-K"),
        filing("0000320193-24-000005", "10-Q"),
        filing("0000320193-23-000106", "10-K"),
        filing("0000320193-22-000108", "10-K"),
    ],
    "789019": [],
}


class FakeDirectory(FilingDirectory):
    def __init__(self):
        self.listed = []

    def get_company_tickers(self):
        return list(TICKERS)

    def list_filings(self, cik):
        self.listed.append(cik)
        return list(FILINGS.get(cik, []))


class FakeFetcher(FilingFetcher):
    def __init__(self):
        self.fetched = []

    def fetch(self, metadata):
        self.fetched.append(metadata)
        return RawFiling(metadata=metadata, content=FILING_HTML)


def make_service():
    return EdgarService(FakeDirectory(), FakeFetcher())


class TestTickerLookup:
    """Tests for ticker resolution."""

    def test_find_ticker_case_insensitive(self):
        """Test that ticker lookup ignores case."""
        service = make_service()

        assert service.find_ticker("aapl").cik == "320193"
        assert service.find_ticker("MsFt").name == "MICROSOFT CORP"

    def test_unknown_ticker(self):
        """Test that an unknown ticker raises."""
        service = make_service()

        with pytest.raises(TickerNotFoundError, match="Ticker not found: ZZZZ"):
            service.find_ticker("ZZZZ")

    def test_unknown_ticker_filings(self):
        """Test that listing filings for an unknown ticker raises."""
        with pytest.raises(TickerNotFoundError):
            make_service().get_filings_by_ticker("ZZZZ")

    def test_get_tickers(self):
        """Test that all tickers are returned."""
        assert [t.ticker for t in make_service().get_tickers()] == ["AAPL", "MSFT"]


class TestFilingSelection:
    """Tests for filing list filtering."""

    def test_filings_by_ticker(self):
        """Test that the ticker resolves to the company's CIK."""
        service = make_service()

        filings = service.get_filings_by_ticker("AAPL")

        assert len(filings) == 4
        assert service.directory.listed == ["320193"]

    def test_filings_by_cik(self):
        """Test listing by CIK."""
        assert len(make_service().get_filings_by_cik("320193")) == 4

    def test_10k_filter(self):
        """Test that only 10-K filings are kept, most recent first."""
        filings = make_service().get_10k_filings_by_ticker("AAPL")

        assert [f.accession_number for f in filings] == [
            "0000320193-23-000106",
            "0000320193-22-000108",
        ]


class TestLoadFilings:
    """Tests for download and segmentation through the service."""

    def test_latest_10k(self):
        """Test that the most recent 10-K is downloaded and segmented."""
        service = make_service()

        document = service.load_latest_10k_for_ticker("aapl")

        assert service.fetcher.fetched[0].accession_number == "0000320193-23-000106"
        assert document.metadata["accessionNumber"] == "0000320193-23-000106"
        assert document.header_chunk.content == "<ix:hidden>facts</ix:hidden>"
        assert [c.metadata["itemTitle"] for c in document.items] == [
            "Item 1. Business",
            "Item 2. Properties",
        ]

    def test_latest_10k_none_on_file(self):
        """Test a company without any 10-K."""
        with pytest.raises(FilingNotFoundError):
            make_service().load_latest_10k_for_ticker("MSFT")

    def test_by_accession_number(self):
        """Test loading a specific 10-K."""
        service = make_service()

        document = service.load_10k_by_cik_and_accession_number("320193", "0000320193-22-000108")

        assert document.metadata["accessionNumber"] == "0000320193-22-000108"
        assert len(service.fetcher.fetched) == 1

    def test_by_accession_number_not_found(self):
        """Test an accession number that is not listed."""
        with pytest.raises(FilingNotFoundError):
            make_service().load_10k_by_cik_and_accession_number("320193", "0000000000-00-000000")

    def test_by_accession_number_wrong_form(self):
        """Test that a listed non-10-K filing is not selected."""
        service = make_service()

        with pytest.raises(FilingNotFoundError):
            service.load_10k_by_cik_and_accession_number("320193", "0000320193-24-000005")
        assert service.fetcher.fetched == []

    def test_unsupported_form_not_downloaded(self):
        """Test that unsupported forms fail before any download."""
        service = make_service()

        with pytest.raises(UnsupportedFormError):
            service.download_and_parse_filing(filing("0000320193-24-000010", "8-K"))
        assert service.fetcher.fetched == []


class TestFromConfig:
    """Tests for EdgarService.from_config."""

    def test_wires_client(self):
        """Test that one EdgarClient serves as directory and fetcher."""
        config = PipelineConfig.model_validate({
            "edgar": {"user_agent": "Acme ops@acme.test"},
            "parse": {"encoding": "cp1252"},
        })

        service = EdgarService.from_config(config)

        assert isinstance(service.directory, EdgarClient)
        assert service.directory is service.fetcher
        assert service.directory.user_agent == "Acme ops@acme.test"
        assert service.directory.encoding == "cp1252"

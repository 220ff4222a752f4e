"""
CLI interface for the filing pipeline.

Usage:
    python -m edgar_pipeline tickers --search apple
    python -m edgar_pipeline filings --ticker AAPL --form 10-K
    python -m edgar_pipeline fetch --ticker AAPL --output aapl_10k.json
    python -m edgar_pipeline fetch --cik 320193 --accession 0000320193-23-000106
    python -m edgar_pipeline segment data/aapl-20230930.htm --cik 320193 --output out.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import PipelineConfig, load_config
from .fetch import EdgarService
from .parse import TEN_K_FORM, Document, EdgarPipelineError, FilingMetadata, FilingProcessor

logger = logging.getLogger(__name__)


def configure_logging(config: PipelineConfig, verbose: bool = False) -> None:
    """Configure root logging from config."""
    level = logging.DEBUG if verbose else config.logging.level.upper()
    logging.basicConfig(
        level=level,
        format=config.logging.format,
        datefmt=config.logging.datefmt,
    )


def write_json(data, output: str = None) -> None:
    """Write data as JSON to a file, or stdout when no file is given."""
    text = json.dumps(data, indent=2, default=str, ensure_ascii=False)
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Saved to: {output_path}")
    else:
        print(text)


def print_document_summary(document: Document) -> None:
    print(f"\n{'='*60}")
    print("SEGMENTED FILING")
    print(f"{'='*60}")
    for key in ("companyName", "form", "accessionNumber", "filingDate"):
        print(f"{key}: {document.metadata.get(key, 'N/A')}")
    header_size = len(document.header_chunk.content) if document.header_chunk else 0
    print(f"XBRL header: {header_size:,} chars")
    print(f"Items: {len(document.items)}")
    for chunk in document.items:
        print(f"  [{chunk.metadata['itemIndex']:>2}] {chunk.metadata['itemTitle']} "
              f"({len(chunk.content):,} chars)")


def cmd_tickers(args, config: PipelineConfig):
    """List company tickers."""
    service = EdgarService.from_config(config)
    tickers = service.get_tickers()

    if args.search:
        needle = args.search.lower()
        tickers = [t for t in tickers if needle in t.ticker.lower() or needle in t.name.lower()]

    write_json([t.model_dump() for t in tickers], args.output)


def cmd_filings(args, config: PipelineConfig):
    """List a company's filings."""
    service = EdgarService.from_config(config)
    if args.ticker:
        filings = service.get_filings_by_ticker(args.ticker)
    else:
        filings = service.get_filings_by_cik(args.cik)

    if args.form:
        filings = [f for f in filings if f.form == args.form]

    write_json([f.model_dump(by_alias=True) for f in filings], args.output)


def cmd_fetch(args, config: PipelineConfig):
    """Download a 10-K and segment it."""
    service = EdgarService.from_config(config)
    if args.accession:
        if not args.cik:
            raise SystemExit("--accession requires --cik")
        document = service.load_10k_by_cik_and_accession_number(args.cik, args.accession)
    elif args.ticker:
        document = service.load_latest_10k_for_ticker(args.ticker)
    else:
        raise SystemExit("fetch requires --ticker or --cik with --accession")

    print_document_summary(document)
    if args.output:
        write_json(document.to_dict(), args.output)


def cmd_segment(args, config: PipelineConfig):
    """Segment a filing that is already on disk."""
    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")

    metadata = FilingMetadata(
        cik=args.cik,
        name=args.name,
        accession_number=args.accession,
        filing_date=args.filing_date,
        form=args.form,
        primary_document=path.name,
    )
    document = FilingProcessor().convert_html(
        path.read_bytes(), metadata, encoding=config.parse.encoding
    )

    print_document_summary(document)
    if args.output:
        write_json(document.to_dict(), args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SEC Filing Segmentation Pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file (default: built-in settings)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Tickers command
    tickers_parser = subparsers.add_parser("tickers", help="List company tickers")
    tickers_parser.add_argument("--search", help="Filter by ticker or company name")
    tickers_parser.add_argument("--output", help="Path to save JSON output")

    # Filings command
    filings_parser = subparsers.add_parser("filings", help="List a company's filings")
    company = filings_parser.add_mutually_exclusive_group(required=True)
    company.add_argument("--ticker", help="Ticker symbol (e.g., AAPL)")
    company.add_argument("--cik", help="Company CIK")
    filings_parser.add_argument("--form", help="Only list this form type (e.g., 10-K)")
    filings_parser.add_argument("--output", help="Path to save JSON output")

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Download and segment a 10-K")
    fetch_parser.add_argument("--ticker", help="Ticker symbol; selects the latest 10-K")
    fetch_parser.add_argument("--cik", help="Company CIK (with --accession)")
    fetch_parser.add_argument("--accession", help="Accession number of a specific 10-K")
    fetch_parser.add_argument("--output", help="Path to save the segmented document")

    # Segment command
    segment_parser = subparsers.add_parser("segment", help="Segment a local filing")
    segment_parser.add_argument("path", help="Path to the filing HTML")
    segment_parser.add_argument("--form", default=TEN_K_FORM, help="Form type (default: 10-K)")
    segment_parser.add_argument("--cik", help="Company CIK")
    segment_parser.add_argument("--name", help="Company name")
    segment_parser.add_argument("--accession", help="Accession number")
    segment_parser.add_argument("--filing-date", help="Filing date (YYYY-MM-DD)")
    segment_parser.add_argument("--output", help="Path to save the segmented document")

    return parser


COMMANDS = {
    "tickers": cmd_tickers,
    "filings": cmd_filings,
    "fetch": cmd_fetch,
    "segment": cmd_segment,
}


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    # Load environment variables from .env file
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in COMMANDS:
        parser.print_help()
        return 1

    config = load_config(args.config)
    configure_logging(config, args.verbose)

    try:
        COMMANDS[args.command](args, config)
    except EdgarPipelineError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

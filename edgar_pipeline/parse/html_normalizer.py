"""
HTML normalization for SEC filings.

Parses raw filing markup into a BeautifulSoup tree and strips the
presentational noise (inline styles, colspans, links, empty elements)
that EDGAR documents carry in large quantities.
"""

import logging
from typing import Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .errors import ParseError

logger = logging.getLogger(__name__)

# html.parser keeps namespaced tags such as ix:header intact
HTML_PARSER = "html.parser"

STRIPPED_ATTRIBUTES = ("style", "colspan")


def parse_html(content: Union[bytes, str], encoding: str = "utf-8") -> BeautifulSoup:
    """
    Parse filing markup into a document tree.

    Malformed markup is tolerated; only content that cannot be decoded
    with the given charset is rejected.

    Args:
        content: Raw filing bytes or already-decoded text
        encoding: Charset of the raw bytes

    Returns:
        Parsed BeautifulSoup tree

    Raises:
        ParseError: If the bytes cannot be decoded
    """
    if isinstance(content, (bytes, bytearray)):
        try:
            text = bytes(content).decode(encoding)
        except LookupError as e:
            raise ParseError(f"Unknown charset: {encoding}") from e
        except UnicodeDecodeError as e:
            raise ParseError(f"Filing content is not valid {encoding}: {e}") from e
    else:
        text = content

    try:
        return BeautifulSoup(text, HTML_PARSER)
    except ParserRejectedMarkup as e:
        raise ParseError(f"Markup rejected by parser: {e}") from e


def strip_form_html(soup: BeautifulSoup) -> BeautifulSoup:
    """
    Strip inline styles, colspans, empty elements and links from the tree.

    The tree is modified in place and returned. Empty elements are removed
    in a single pass over the elements present when the pass starts,
    deepest first, so a parent emptied by removing its children is removed
    too. Links are removed afterwards, which can leave their former parent
    empty.

    Args:
        soup: Parsed filing

    Returns:
        The same, cleaned tree
    """
    for attr in STRIPPED_ATTRIBUTES:
        for elem in soup.find_all(attrs={attr: True}):
            del elem[attr]

    removed = 0
    for elem in reversed(soup.find_all(True)):
        if elem.find(True, recursive=False) is None and not elem.get_text().strip():
            elem.decompose()
            removed += 1

    links = soup.find_all("a")
    for link in links:
        # Nested links go away with their outer link
        if not link.decomposed:
            link.decompose()

    logger.debug(f"Stripped {removed} empty elements and {len(links)} links")
    return soup

"""
Inline XBRL header extraction.

iXBRL filings embed their hidden facts, contexts and units in an
<ix:header> element. It is pulled out of the document before the
narrative text is segmented.
"""

import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

IX_HEADER = "ix:header"


def extract_xbrl_header(soup: BeautifulSoup) -> bytes:
    """
    Remove all ix:header elements from the tree and return their markup.

    Must run before strip_form_html(), otherwise the header loses its
    inline styling and empty elements.

    Args:
        soup: Parsed filing, modified in place

    Returns:
        Inner markup of all headers in document order, UTF-8 encoded.
        Empty bytes if the filing has no header.
    """
    headers = soup.find_all(IX_HEADER)
    if not headers:
        return b""

    markup = "\n".join(header.decode_contents() for header in headers)
    for header in headers:
        if not header.decomposed:
            header.decompose()

    logger.debug(f"Extracted {len(headers)} {IX_HEADER} element(s), {len(markup):,} chars")
    return markup.encode("utf-8")

"""
SEC Filing Segmentation Pipeline.

This package provides tools for processing SEC filings:
- Downloading filings and company lists from EDGAR
- Extracting the inline XBRL header
- Normalizing filing HTML
- Segmenting 10-K narratives into form items
"""

__version__ = "0.1.0"

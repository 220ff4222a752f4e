"""
Exceptions raised while converting filings.
"""


class EdgarPipelineError(Exception):
    """Base class for all pipeline errors."""


class ParseError(EdgarPipelineError):
    """Filing content could not be decoded into a document tree."""


class UnsupportedFormError(EdgarPipelineError, ValueError):
    """Filing form type has no built-in item pattern."""

    def __init__(self, form: str, supported: frozenset):
        self.form = form
        self.supported = supported
        supported_str = ", ".join(sorted(supported))
        super().__init__(f"Currently only {supported_str} forms supported (got {form!r})")

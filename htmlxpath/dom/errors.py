"""
Exceptions raised by the DOM facade.
Each failure mode keeps its own class so callers can tell a broken
document from a broken query from a query that simply matched nothing.
"""


class HTMLDocumentError(Exception):
    """Base class for all errors raised by htmlxpath."""


class ParseError(HTMLDocumentError):
    """Raised when bytes cannot be decoded as UTF-8 or parsed into a tree."""


class NoRootError(HTMLDocumentError):
    """Raised when a parsed tree has no root element."""


class QueryError(HTMLDocumentError):
    """Raised when an XPath expression is malformed or does not select nodes."""

    def __init__(self, message: str, expression: str = None):
        super().__init__(message)
        self.expression = expression


class NotFoundError(HTMLDocumentError, LookupError):
    """Raised when a valid XPath expression matches no nodes."""

    def __init__(self, expression: str):
        super().__init__(f"No node matches XPath expression: {expression}")
        self.expression = expression


class FetchError(HTMLDocumentError):
    """Raised when a URL or file cannot be loaded."""

    def __init__(self, url: str, reason: str = ""):
        message = f"Failed loading {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url

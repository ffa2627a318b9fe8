"""
htmlxpath - read-only HTML documents with XPath lookup.
"""

__version__ = "1.0.0"
__description__ = "Read-only HTML document and node wrappers with XPath queries"

from htmlxpath.dom import (Document, Node, NodeType, HTMLDocumentError, ParseError,
                           NoRootError, QueryError, NotFoundError, FetchError)

__all__ = [
    'Document', 'Node', 'NodeType',
    'HTMLDocumentError', 'ParseError', 'NoRootError', 'QueryError', 'NotFoundError', 'FetchError',
]

"""
DOM facade over an lxml tree.
This package provides read-only Document and Node wrappers with XPath lookup.
"""

from .errors import (HTMLDocumentError, ParseError, NoRootError, QueryError,
                     NotFoundError, FetchError)
from .node import Node, NodeType
from .document import Document

__all__ = [
    'Document', 'Node', 'NodeType',
    'HTMLDocumentError', 'ParseError', 'NoRootError', 'QueryError', 'NotFoundError', 'FetchError',
]

"""
Document implementation for the DOM facade.
A Document owns a parsed HTML tree and hands out Nodes that refer into it.
"""

import logging
import threading
from typing import Optional

from lxml import etree

from htmlxpath.utils.config import get_config
from htmlxpath.utils.logging import PerformanceLogger

from . import parser as html_parser
from .errors import NoRootError, ParseError
from .node import Node

logger = logging.getLogger(__name__)


class Document:
    """
    A parsed HTML document.
    
    Construction either yields a Document holding a tree or raises; there
    is no partially initialized state. The tree is released together with
    the Document once neither it nor any Node derived from it is referenced.
    """
    
    def __init__(self, tree: etree._ElementTree, parser: Optional[str] = None):
        """
        Wrap an already parsed tree.
        
        Args:
            tree: An lxml ElementTree (or any element of one)
            parser: Name of the backend that produced the tree, if known
        """
        if tree is None:
            raise ParseError("Document requires a parsed tree")
        if isinstance(tree, etree._Element):
            tree = tree.getroottree()
        
        self._tree = tree
        self.parser = parser
        # Guards every call into the engine; nodes share their document's lock
        self.lock = threading.RLock()
    
    @classmethod
    def load(cls, data, parser: Optional[str] = None) -> 'Document':
        """
        Parse UTF-8 encoded HTML.
        
        Args:
            data: Raw HTML bytes
            parser: Parser backend name; defaults to the configured parser.backend
            
        Returns:
            The parsed Document
            
        Raises:
            ParseError: If the bytes are not UTF-8, are empty, or cannot be parsed
        """
        backend = parser or get_config().get("parser.backend", html_parser.HTML5LIB)
        
        with PerformanceLogger(logger, "Document").measure("parse"):
            tree = html_parser.parse(data, backend)
        
        return cls(tree, backend)
    
    read_data_as_utf8 = load
    
    @classmethod
    def from_string(cls, text: str, parser: Optional[str] = None) -> 'Document':
        """Parse HTML given as a string (encoded to UTF-8 first)."""
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        return cls.load(text.encode("utf-8"), parser)
    
    @property
    def tree(self) -> etree._ElementTree:
        """The underlying lxml tree."""
        return self._tree
    
    def root_node(self) -> Node:
        """
        Get the root element of the document.
        
        Returns:
            A Node for the root element; repeated calls return equal nodes
            
        Raises:
            NoRootError: If the tree has no root element
        """
        with self.lock:
            root = self._tree.getroot()
        if root is None:
            raise NoRootError("Document has no root element")
        return Node(root, self)
    
    rootNode = root_node
    
    def __repr__(self) -> str:
        return f"<Document parser={self.parser!r}>"

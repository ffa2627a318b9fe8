"""
Node implementation for the DOM facade.
A Node is a read-only reference into a tree owned by a Document.
"""

from enum import IntEnum
from typing import Dict, List, Optional

from lxml import etree

from .errors import NotFoundError, QueryError


class NodeType(IntEnum):
    """Node types, numbered as in the DOM specification."""
    ELEMENT_NODE = 1
    ATTRIBUTE_NODE = 2
    TEXT_NODE = 3
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8


def _node_type_of(ref) -> NodeType:
    if isinstance(ref, etree._Comment):
        return NodeType.COMMENT_NODE
    if isinstance(ref, etree._ProcessingInstruction):
        return NodeType.PROCESSING_INSTRUCTION_NODE
    if isinstance(ref, etree._Element):
        return NodeType.ELEMENT_NODE
    if getattr(ref, 'is_attribute', False):
        return NodeType.ATTRIBUTE_NODE
    return NodeType.TEXT_NODE


class Node:
    """
    A position in a parsed HTML tree.
    
    The node keeps a strong reference to its owner document, so the tree
    stays alive for as long as any node derived from it is reachable.
    Element, comment and processing instruction nodes wrap lxml elements;
    text and attribute nodes wrap the string results lxml returns for
    text() and @attr selections.
    """
    
    def __init__(self, ref, owner_document: 'Document'):
        """
        Initialize a node.
        
        Args:
            ref: The lxml element or string result this node refers to
            owner_document: The document that owns the tree
        """
        self._ref = ref
        self.owner_document = owner_document
        self.node_type = _node_type_of(ref)
    
    @property
    def node_name(self) -> str:
        """
        Tag name for elements, attribute name for attributes, '#text' or
        '#comment' otherwise. Namespaced (SVG, MathML) tags give their local name.
        """
        if self.node_type == NodeType.ELEMENT_NODE:
            return etree.QName(self._ref).localname
        if self.node_type == NodeType.ATTRIBUTE_NODE:
            return self._ref.attrname
        if self.node_type == NodeType.PROCESSING_INSTRUCTION_NODE:
            return self._ref.target
        if self.node_type == NodeType.COMMENT_NODE:
            return "#comment"
        return "#text"
    
    @property
    def text_contents(self) -> str:
        """
        Get the text of this node and all its descendants.
        
        Descendant text nodes are concatenated in document order with no
        separator. Comments do not contribute. A node without text yields
        an empty string.
        
        Returns:
            str: The concatenated text content
        """
        if self.node_type == NodeType.ELEMENT_NODE:
            with self.owner_document.lock:
                return str(self._ref.xpath("string()"))
        if self.node_type in (NodeType.COMMENT_NODE, NodeType.PROCESSING_INSTRUCTION_NODE):
            return self._ref.text or ""
        return str(self._ref)
    
    textContents = text_contents
    
    @property
    def parent_node(self) -> Optional['Node']:
        """The parent element, or None at the top of the tree."""
        with self.owner_document.lock:
            parent = self._ref.getparent()
        if parent is None:
            return None
        return Node(parent, self.owner_document)
    
    @property
    def children(self) -> List['Node']:
        """Child elements of this node, in document order."""
        if self.node_type != NodeType.ELEMENT_NODE:
            return []
        with self.owner_document.lock:
            return [Node(child, self.owner_document) for child in self._ref
                    if isinstance(child.tag, str)]
    
    @property
    def attributes(self) -> Dict[str, str]:
        """A copy of the element's attributes (empty for other node types)."""
        if self.node_type != NodeType.ELEMENT_NODE:
            return {}
        return dict(self._ref.attrib)
    
    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get an attribute value.
        
        Args:
            name: The attribute name
            default: Value returned when the attribute is missing
            
        Returns:
            The attribute value or default
        """
        if self.node_type != NodeType.ELEMENT_NODE:
            return default
        return self._ref.get(name, default)
    
    def query_all(self, xpath: str) -> List['Node']:
        """
        Evaluate an XPath expression with this node as the context node.
        
        Relative expressions are resolved against this node; absolute ones
        against the document.
        
        Args:
            xpath: The XPath expression
            
        Returns:
            All matching nodes in document order (possibly none)
            
        Raises:
            QueryError: If the expression is malformed, does not select
                nodes, or this node cannot serve as a context node
        """
        if not isinstance(xpath, str):
            raise TypeError(f"XPath expression must be a string, got {type(xpath).__name__}")
        
        if self.node_type in (NodeType.TEXT_NODE, NodeType.ATTRIBUTE_NODE):
            raise QueryError(f"Cannot evaluate XPath relative to a {self.node_type.name.lower()}", xpath)
        
        with self.owner_document.lock:
            try:
                result = self._ref.xpath(xpath)
            except etree.XPathError as e:
                raise QueryError(f"Invalid XPath expression {xpath!r}: {e}", xpath) from e
        
        if not isinstance(result, list):
            raise QueryError(f"XPath expression {xpath!r} does not select nodes "
                             f"(evaluated to {type(result).__name__})", xpath)
        
        nodes = []
        for item in result:
            # namespace:: axis results come back as (prefix, uri) tuples
            if isinstance(item, tuple):
                raise QueryError(f"XPath expression {xpath!r} selects namespace nodes", xpath)
            nodes.append(Node(item, self.owner_document))
        return nodes
    
    def query(self, xpath: str) -> 'Node':
        """
        Find the first node matching an XPath expression.
        
        The expression is evaluated in full and the first result in
        document order is returned.
        
        Args:
            xpath: The XPath expression
            
        Returns:
            The first matching node
            
        Raises:
            QueryError: If the expression is malformed or does not select nodes
            NotFoundError: If the expression matches nothing
        """
        nodes = self.query_all(xpath)
        if not nodes:
            raise NotFoundError(xpath)
        return nodes[0]
    
    node_for_xpath = query
    nodeForXPath = query
    
    def _identity(self):
        ref = self._ref
        if isinstance(ref, etree._Element):
            return (id(ref),)
        parent = ref.getparent() if hasattr(ref, 'getparent') else None
        return (id(parent), self.node_type, getattr(ref, 'attrname', None),
                getattr(ref, 'is_tail', False), str(ref))
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (self.owner_document is other.owner_document
                and self._identity() == other._identity())
    
    def __hash__(self) -> int:
        return hash((id(self.owner_document),) + self._identity())
    
    def __repr__(self) -> str:
        return f"<Node {self.node_type.name} {self.node_name!r}>"

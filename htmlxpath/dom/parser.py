"""
Parser backends that turn UTF-8 bytes into an lxml tree.
html5lib builds the tree by default; lxml's own HTML parser is the
alternative. Either way the result is an lxml ElementTree, which the
DOM wrappers query with XPath.
"""

import logging
import re

import html5lib
from lxml import etree

from .errors import ParseError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"

HTML5LIB = "html5lib"
LXML = "lxml"
BACKENDS = (HTML5LIB, LXML)

REPLACEMENT_CHARACTER = "\ufffd"

# Characters HTML allows but XML (and so lxml) does not; form feed is handled separately
_XML_INCOMPATIBLE_RE = re.compile(r"[\x00-\x08\x0b\x0e-\x1f\ufffe\uffff]")


def decode(data) -> str:
    """
    Decode a byte buffer as UTF-8.
    
    Args:
        data: bytes, bytearray or memoryview
        
    Returns:
        str: The decoded text (a leading byte order mark is dropped)
        
    Raises:
        TypeError: If data is not a bytes-like object
        ParseError: If data is not valid UTF-8
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like object, got {type(data).__name__}")
    
    try:
        return bytes(data).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Input is not valid UTF-8 (byte offset {e.start}): {e.reason}") from e


def make_xml_compatible(text: str) -> str:
    """
    Replace characters that lxml cannot store in a tree.
    
    Form feed is HTML whitespace and becomes a space; the other control
    characters and the U+FFFE/U+FFFF noncharacters become U+FFFD.
    """
    return _XML_INCOMPATIBLE_RE.sub(REPLACEMENT_CHARACTER, text.replace("\x0c", " "))


def parse(data, backend: str = HTML5LIB) -> etree._ElementTree:
    """
    Parse UTF-8 encoded HTML into an lxml ElementTree.
    
    Empty or whitespace-only input is rejected with ParseError. Input that
    has markup but no content, such as a lone doctype or comment, yields an
    empty html/head/body tree on either backend.
    
    Args:
        data: Raw HTML bytes
        backend: Name of the parser backend, "html5lib" or "lxml"
        
    Returns:
        The parsed tree
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown parser backend {backend!r}, expected one of {', '.join(BACKENDS)}")
    
    text = decode(data)
    if not text.strip():
        raise ParseError("Document is empty")
    
    text = make_xml_compatible(text)
    if backend == HTML5LIB:
        return _parse_html5lib(text)
    return _parse_lxml(text.encode(ENCODING))


def _parse_html5lib(text: str) -> etree._ElementTree:
    try:
        tree = html5lib.parse(text, treebuilder="lxml", namespaceHTMLElements=False)
    except ValueError as e:
        # lxml refusing a string the tree builder passed on
        raise ParseError(f"Could not build tree: {e}") from e
    logger.debug("Parsed %d characters with html5lib", len(text))
    return tree


def _empty_tree() -> etree._ElementTree:
    html = etree.Element("html")
    etree.SubElement(html, "head")
    etree.SubElement(html, "body")
    return etree.ElementTree(html)


def _parse_lxml(data: bytes) -> etree._ElementTree:
    parser = etree.HTMLParser(encoding=ENCODING)
    try:
        root = etree.fromstring(data, parser)
    except (etree.XMLSyntaxError, etree.ParserError) as e:
        raise ParseError(f"Could not parse HTML: {e}") from e
    
    if root is None:
        # libxml2 builds nothing for doctype/comment-only markup
        logger.debug("lxml produced no elements, using an empty html tree")
        return _empty_tree()
    
    logger.debug("Parsed %d bytes with lxml", len(data))
    return root.getroottree()

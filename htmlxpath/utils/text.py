"""
String helpers for presenting extracted text.
"""

import re

_WHITESPACE_RE = re.compile(r'\s+')

ELLIPSIS = "…"


def trimmed(text: str) -> str:
    """Return text without surrounding whitespace."""
    return text.strip()


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def excerpt(text: str, max_length: int) -> str:
    """
    Shorten text to at most max_length characters.
    
    Text that fits is returned unchanged. Longer text is cut to
    max_length - 1 characters, trimmed, and ends with an ellipsis.
    
    Args:
        text: The text to shorten
        max_length: Maximum length of the result
        
    Returns:
        str: The excerpt
    """
    if max_length < 0:
        raise ValueError("max_length must be positive")
    
    if max_length == 0:
        return ""
    
    if len(text) <= max_length:
        return text
    
    return trimmed(text[:max_length - 1]) + ELLIPSIS

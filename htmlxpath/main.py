#!/usr/bin/env python3
"""
htmlxpath - command line entry point.

Loads an HTML document from a URL, a file or stdin and prints the text
of the nodes matching an XPath expression.
"""

import argparse
import logging
import sys
from typing import List, Optional

from htmlxpath import __version__
from htmlxpath.dom import Document
from htmlxpath.dom.errors import (FetchError, HTMLDocumentError, NoRootError, NotFoundError,
                                  ParseError, QueryError)
from htmlxpath.dom.parser import BACKENDS
from htmlxpath.network import Fetcher
from htmlxpath.utils.config import Config, get_config, set_config
from htmlxpath.utils.logging import log_exception, setup_logging
from htmlxpath.utils.text import collapse_whitespace, excerpt

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_FETCH_ERROR = 3
EXIT_PARSE_ERROR = 4
EXIT_QUERY_ERROR = 5

EXIT_CODES = (
    (NotFoundError, EXIT_NOT_FOUND),
    (FetchError, EXIT_FETCH_ERROR),
    (ParseError, EXIT_PARSE_ERROR),
    (NoRootError, EXIT_PARSE_ERROR),
    (QueryError, EXIT_QUERY_ERROR),
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="htmlxpath",
        description="Print the text of HTML nodes selected by an XPath expression"
    )
    
    parser.add_argument("source", help="URL, file path, or - for stdin")
    parser.add_argument("xpath", help="XPath expression, evaluated against the root element")
    parser.add_argument("--all", action="store_true", help="Print every match, one per line")
    parser.add_argument("--excerpt", type=int, default=None, metavar="N",
                        help="Shorten output to N characters (0 prints full text)")
    parser.add_argument("--parser", choices=BACKENDS, default=None, help="Parser backend")
    parser.add_argument("--config", default=None, metavar="PATH", help="Configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"htmlxpath {__version__}")
    
    args = parser.parse_args(argv)
    if args.excerpt is not None and args.excerpt < 0:
        parser.error("--excerpt must not be negative")
    return args


def _read_source(source: str, fetcher: Fetcher) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return fetcher.fetch(source)


def _format(text: str, max_length: int) -> str:
    text = collapse_whitespace(text)
    if max_length:
        text = excerpt(text, max_length)
    return text


def run(args: argparse.Namespace) -> int:
    """
    Execute a parsed command line.
    
    Returns:
        int: Process exit code
    """
    config = get_config()
    max_length = args.excerpt if args.excerpt is not None else config.get("output.excerpt_length", 78)
    
    with Fetcher(config) as fetcher:
        data = _read_source(args.source, fetcher)
    
    document = Document.load(data, args.parser)
    root = document.root_node()
    
    if args.all:
        nodes = root.query_all(args.xpath)
        if not nodes:
            raise NotFoundError(args.xpath)
    else:
        nodes = [root.query(args.xpath)]
    
    for node in nodes:
        print(_format(node.text_contents, max_length))
    
    logger.debug("Printed %d node(s) for %s", len(nodes), args.xpath)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    
    setup_logging(console_level="DEBUG" if args.debug else "WARNING")
    
    if args.config:
        set_config(Config(args.config))
    
    try:
        return run(args)
    except HTMLDocumentError as e:
        if args.debug:
            log_exception(logger, e, "Query failed")
        print(f"htmlxpath: {e}", file=sys.stderr)
        for error, code in EXIT_CODES:
            if isinstance(e, error):
                return code
        raise


if __name__ == "__main__":
    sys.exit(main())

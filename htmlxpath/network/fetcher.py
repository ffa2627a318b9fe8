"""
Fetcher for loading HTML over HTTP or from local files.
Requests are made through a shared requests session with a retry policy;
asynchronous variants run on a thread pool and return futures.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional
from urllib.parse import unquote, urlparse

import certifi
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from htmlxpath.dom import Document, Node
from htmlxpath.dom.errors import FetchError
from htmlxpath.utils.config import Config, get_config

logger = logging.getLogger(__name__)


class Fetcher:
    """
    Loads documents and runs XPath queries against them.
    
    Use as a context manager, or call close() when done, to release the
    HTTP session and worker threads.
    """
    
    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the fetcher.
        
        Args:
            config: Configuration to read network settings from (default: the global one)
        """
        self.config = config or get_config()
        self.timeout = self.config.get("network.timeout", 30)
        self.session = self._create_session()
        self._executor: Optional[ThreadPoolExecutor] = None
        
        logger.debug("Fetcher initialized (timeout: %s)", self.timeout)
    
    def _create_session(self) -> requests.Session:
        """
        Create a new requests session with retry configuration.
        
        Returns:
            A configured requests session
        """
        session = requests.Session()
        
        retry_strategy = Retry(
            total=self.config.get("network.retries", 3),
            backoff_factor=self.config.get("network.backoff_factor", 0.5),
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "HEAD"]
        )
        
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        
        session.verify = certifi.where()
        
        session.headers.update({
            "User-Agent": self.config.get("network.user_agent", "htmlxpath"),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        })
        
        return session
    
    @property
    def executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.get("network.max_workers", 4),
                thread_name_prefix="htmlxpath-fetch"
            )
        return self._executor
    
    def fetch(self, url: str) -> bytes:
        """
        Load the raw bytes behind a URL.
        
        http(s) URLs are requested with the session; file:// URLs and
        plain paths are read from disk.
        
        Args:
            url: The URL or file path
            
        Returns:
            bytes: The response body
            
        Raises:
            FetchError: If the resource cannot be loaded
        """
        parsed = urlparse(url)
        
        if parsed.scheme in ("http", "https"):
            return self._fetch_http(url)
        if parsed.scheme == "file":
            return self._read_file(url, unquote(parsed.path))
        if parsed.scheme == "" or os.path.exists(url):
            return self._read_file(url, url)
        
        raise FetchError(url, f"unsupported URL scheme {parsed.scheme!r}")
    
    def _fetch_http(self, url: str) -> bytes:
        logger.info("Fetching %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e
        
        logger.debug("Fetched %s (%d bytes, status %d)", url, len(response.content), response.status_code)
        return response.content
    
    def _read_file(self, url: str, path: str) -> bytes:
        logger.info("Reading %s", path)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise FetchError(url, str(e)) from e
    
    def load(self, url: str, parser: Optional[str] = None) -> Document:
        """Fetch a URL and parse it as a Document."""
        return Document.load(self.fetch(url), parser)
    
    def query_url(self, url: str, xpath: str, parser: Optional[str] = None) -> Node:
        """
        Fetch a URL, parse it and return the first node matching xpath.
        
        The first failing step raises and the remaining steps do not run.
        
        Args:
            url: The URL or file path
            xpath: XPath expression evaluated against the root element
            parser: Parser backend name
            
        Returns:
            Node: The first match
        """
        document = self.load(url, parser)
        return document.root_node().query(xpath)
    
    def fetch_async(self, url: str) -> Future:
        """Fetch a URL on the worker pool; the future resolves to bytes."""
        return self.executor.submit(self.fetch, url)
    
    def query_url_async(self, url: str, xpath: str, parser: Optional[str] = None) -> Future:
        """Run query_url on the worker pool; the future resolves to a Node."""
        return self.executor.submit(self.query_url, url, xpath, parser)
    
    def close(self) -> None:
        """Shut down the worker pool and the HTTP session."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self.session.close()
    
    def __enter__(self) -> 'Fetcher':
        return self
    
    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

"""
Utility modules for htmlxpath.
"""

from htmlxpath.utils.config import Config, get_config, set_config
from htmlxpath.utils.logging import setup_logging, log_exception, PerformanceLogger
from htmlxpath.utils.text import trimmed, excerpt, collapse_whitespace

__all__ = [
    'Config',
    'get_config',
    'set_config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
    'trimmed',
    'excerpt',
    'collapse_whitespace',
]

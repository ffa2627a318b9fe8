"""
Network access for loading documents.
"""

from .fetcher import Fetcher

__all__ = ['Fetcher']

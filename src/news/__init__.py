"""
News module - Fetches headlines for ephemeral context
"""

from .fetcher import NewsFetcher

__all__ = ["NewsFetcher"]

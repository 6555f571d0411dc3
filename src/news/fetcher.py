"""
News Fetcher

Fetches a few headlines from NewsAPI and formats them as a text block.
Every failure degrades to a fallback message instead of raising.
"""

from typing import Any, Dict, List, Optional
import httpx
import logging

from config.settings import Settings
from ..context.prompts import ContextTemplates

logger = logging.getLogger(__name__)


class NewsFetcher:
    """
    Client for the NewsAPI `everything` endpoint.

    Usage:
        fetcher = NewsFetcher(settings)
        block = await fetcher.fetch("latest AI news", limit=3)
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the news fetcher.

        Args:
            settings: Application settings (API key, URL, timeout)
            transport: Optional httpx transport, used to stub the network
        """
        self.api_key = settings.news_api_key
        self.url = settings.news_api_url
        self.timeout = settings.news_timeout_seconds
        self.transport = transport
        self.templates = ContextTemplates()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def fetch(self, query: str, limit: int = 3) -> str:
        """
        Fetch headlines matching a query.

        Args:
            query: Free-text search query (the raw user message)
            limit: Maximum number of articles

        Returns:
            Formatted news block, or a fallback message
        """
        if not self.api_key:
            logger.warning("NEWS_API_KEY not set, returning fallback news text")
            return self.templates.NEWS_UNAVAILABLE

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    self.url,
                    params={
                        "q": query,
                        "pageSize": limit,
                        "sortBy": "publishedAt",
                        "language": "en",
                    },
                    headers={"X-Api-Key": self.api_key}
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException:
            logger.warning(f"News API timed out after {self.timeout}s")
            return self.templates.NEWS_UNAVAILABLE
        except httpx.HTTPError as e:
            logger.error(f"News API error: {e}")
            return self.templates.NEWS_UNAVAILABLE
        except ValueError as e:
            logger.error(f"News API returned invalid JSON: {e}")
            return self.templates.NEWS_UNAVAILABLE

        articles = data.get("articles") if isinstance(data, dict) else None
        if not isinstance(articles, list):
            logger.error(f"Unexpected News API payload: {str(data)[:200]}")
            return self.templates.NEWS_UNAVAILABLE

        if not articles:
            return self.templates.NEWS_EMPTY

        logger.info(f"Fetched {min(len(articles), limit)} news articles")
        return self._format_articles(articles[:limit])

    def _format_articles(self, articles: List[Dict[str, Any]]) -> str:
        """Format articles as a numbered list"""
        lines = [self.templates.NEWS_HEADER]

        for i, article in enumerate(articles, 1):
            title = (article.get('title') or 'Untitled').strip()
            source = (article.get('source') or {}).get('name', '')
            description = (article.get('description') or '').strip()

            line = f"{i}. {title}"
            if source:
                line += f" ({source})"
            lines.append(line)

            if description:
                lines.append(f"   {description[:200]}")

        return "\n".join(lines)

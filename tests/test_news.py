"""
Tests for the news fetcher
"""

import httpx
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from src.context.prompts import ContextTemplates
from src.news.fetcher import NewsFetcher


ARTICLES = [
    {
        "source": {"id": None, "name": "Campus Daily"},
        "title": "Library extends opening hours",
        "description": "The main library will stay open until midnight.",
    },
    {
        "source": {"name": "City Times"},
        "title": "New bus route to campus",
        "description": None,
    },
    {
        "source": {"name": "Tech Wire"},
        "title": "Students win robotics cup",
        "description": "Team beats 40 universities.",
    },
    {
        "source": {"name": "Extra"},
        "title": "Should not appear",
        "description": "",
    },
]


def make_fetcher(handler, api_key="test-key"):
    settings = Settings(news_api_key=api_key)
    return NewsFetcher(settings, transport=httpx.MockTransport(handler))


class TestNewsFetcher:
    """Tests for NewsFetcher"""

    def setup_method(self):
        self.requests = []

    def _ok(self, request):
        self.requests.append(request)
        return httpx.Response(200, json={"status": "ok", "totalResults": 4, "articles": ARTICLES})

    @pytest.mark.asyncio
    async def test_formats_articles(self):
        fetcher = make_fetcher(self._ok)

        block = await fetcher.fetch("campus news", limit=3)

        assert block.splitlines() == [
            "Latest news:",
            "1. Library extends opening hours (Campus Daily)",
            "   The main library will stay open until midnight.",
            "2. New bus route to campus (City Times)",
            "3. Students win robotics cup (Tech Wire)",
            "   Team beats 40 universities.",
        ]

    @pytest.mark.asyncio
    async def test_request_parameters(self):
        fetcher = make_fetcher(self._ok)

        await fetcher.fetch("any news on exams?", limit=3)

        request = self.requests[0]
        assert request.url.params["q"] == "any news on exams?"
        assert request.url.params["pageSize"] == "3"
        assert request.headers["X-Api-Key"] == "test-key"

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        fetcher = make_fetcher(self._ok, api_key=None)

        assert not fetcher.is_configured
        assert await fetcher.fetch("news") == ContextTemplates.NEWS_UNAVAILABLE
        assert self.requests == []

    @pytest.mark.asyncio
    async def test_http_error(self):
        fetcher = make_fetcher(lambda request: httpx.Response(401, json={"status": "error"}))

        assert await fetcher.fetch("news") == ContextTemplates.NEWS_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = make_fetcher(handler)

        assert await fetcher.fetch("news") == ContextTemplates.NEWS_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        fetcher = make_fetcher(handler)

        assert await fetcher.fetch("news") == ContextTemplates.NEWS_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        fetcher = make_fetcher(lambda request: httpx.Response(200, content=b"<html>"))

        assert await fetcher.fetch("news") == ContextTemplates.NEWS_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        fetcher = make_fetcher(lambda request: httpx.Response(200, json={"status": "ok"}))

        assert await fetcher.fetch("news") == ContextTemplates.NEWS_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_no_articles(self):
        fetcher = make_fetcher(lambda request: httpx.Response(200, json={"status": "ok", "articles": []}))

        assert await fetcher.fetch("news") == ContextTemplates.NEWS_EMPTY


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

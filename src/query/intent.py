"""
Intent Parser

Classifies a chat message to determine which ephemeral context
the assembler should attach:
1. Current date and time
2. News headlines
"""

from typing import List
from pydantic import BaseModel
from enum import Enum


class ContextSource(str, Enum):
    DOCUMENT = "document"       # Uploaded document text
    NEWS = "news"               # Fetched headlines
    DATETIME = "datetime"       # Current date and time


class QueryIntent(BaseModel):
    """Parsed message intent"""
    needs_datetime: bool = False
    needs_news: bool = False
    matched_keywords: List[str] = []

    @property
    def sources(self) -> List[ContextSource]:
        """Ephemeral sources to attach, in prompt order"""
        sources = []
        if self.needs_datetime:
            sources.append(ContextSource.DATETIME)
        if self.needs_news:
            sources.append(ContextSource.NEWS)
        return sources


class IntentParser:
    """
    Parses chat messages into context intents.

    Matching is a case-insensitive substring test, so it is coarse:
    "know" contains "now" and "updated" contains "date".

    Usage:
        parser = IntentParser()
        intent = parser.parse("Any breaking news today?")
        # QueryIntent(
        #     needs_datetime=True,
        #     needs_news=True,
        #     matched_keywords=["today", "news", "breaking"]
        # )
    """

    DATETIME_KEYWORDS = [
        'date', 'time', 'today', 'now', 'current', 'tomorrow', 'yesterday'
    ]

    NEWS_KEYWORDS = [
        'news', 'headline', 'breaking', 'current events', 'latest'
    ]

    def parse(self, message: str) -> QueryIntent:
        """
        Parse a chat message into a QueryIntent.

        Args:
            message: User's chat message

        Returns:
            QueryIntent with the context sources to attach
        """
        message_lower = (message or "").lower()

        datetime_hits = self._match(message_lower, self.DATETIME_KEYWORDS)
        news_hits = self._match(message_lower, self.NEWS_KEYWORDS)

        return QueryIntent(
            needs_datetime=bool(datetime_hits),
            needs_news=bool(news_hits),
            matched_keywords=datetime_hits + news_hits
        )

    def _match(self, message: str, keywords: List[str]) -> List[str]:
        return [kw for kw in keywords if kw in message]

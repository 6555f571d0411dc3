"""
Context Assembler

Builds the prompt that gets sent to the LLM.
Combines uploaded document text, conversation history and
per-message context (current date/time, news headlines).
"""

from typing import Callable, List, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import BaseModel
import asyncio
import logging

from config.settings import Settings
from ..query.intent import IntentParser, QueryIntent, ContextSource
from .prompts import ContextTemplates

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    """A single turn of conversation history"""
    sender: Optional[str] = None
    content: Optional[str] = ""


@dataclass
class PromptPart:
    """Role-tagged prompt fragment"""
    role: str  # system | user | assistant
    text: str


@dataclass
class ContextBlock:
    """Context fragment with the source it came from"""
    source: ContextSource
    text: str


@dataclass
class ContextPacket:
    """Context packet for LLM"""
    system_prompt: Optional[str]
    parts: List[PromptPart]
    intent: QueryIntent
    blocks: List[ContextBlock] = field(default_factory=list)

    @property
    def user_message(self) -> str:
        """Text of the final (augmented) user turn"""
        return self.parts[-1].text if self.parts else ""

    def to_prompt(self) -> str:
        """Render the whole packet as readable text"""
        sections = []

        if self.system_prompt:
            sections.append(f"## Instructions\n{self.system_prompt}")

        for part in self.parts:
            sections.append(f"## {part.role.capitalize()}\n{part.text}")

        return "\n\n".join(sections)


class ContextAssembler:
    """
    Assembles the prompt for the LLM.

    Emitted order: [document context] + history + [augmented user turn].
    The document store is only read here, never written.

    Usage:
        assembler = ContextAssembler(settings, news_fetcher=fetcher)
        packet = await assembler.assemble(
            message="Any news about the exam schedule?",
            history=[ChatMessage(sender="user", content="hi")],
            document_text=store.get(session_id)
        )
    """

    USER_ROLE = "user"
    ASSISTANT_ROLE = "assistant"
    SYSTEM_ROLE = "system"

    def __init__(
        self,
        settings: Settings,
        news_fetcher=None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the assembler.

        Args:
            settings: Application settings
            news_fetcher: Object with an async `fetch(query, limit)` method
            clock: Returns the current time (defaults to now in settings.timezone)
        """
        self.settings = settings
        self.news_fetcher = news_fetcher
        self.clock = clock or self._default_clock(settings.timezone)
        self.intent_parser = IntentParser()
        self.templates = ContextTemplates()

    async def assemble(
        self,
        message: str,
        history: Optional[List[ChatMessage]] = None,
        document_text: Optional[str] = None
    ) -> ContextPacket:
        """
        Assemble a context packet for the LLM.

        Args:
            message: The user's current message
            history: Prior conversation turns, oldest first
            document_text: Text of the session's uploaded document, if any

        Returns:
            ContextPacket ready for the LLM
        """
        intent = self.intent_parser.parse(message)
        blocks = []
        parts = []

        # Ephemeral context, in order: date/time then news
        if intent.needs_datetime:
            blocks.append(ContextBlock(
                source=ContextSource.DATETIME,
                text=self.templates.datetime_context(self.clock())
            ))

        if intent.needs_news:
            blocks.append(ContextBlock(
                source=ContextSource.NEWS,
                text=await self._fetch_news(message)
            ))

        # Document context is background, so it goes before history
        if document_text:
            document_block = ContextBlock(
                source=ContextSource.DOCUMENT,
                text=self.templates.document_context(document_text)
            )
            blocks.insert(0, document_block)
            parts.append(PromptPart(role=self.SYSTEM_ROLE, text=document_block.text))

        parts.extend(self._format_history(history or []))

        ephemeral = [b.text for b in blocks if b.source != ContextSource.DOCUMENT]
        user_text = self.templates.SEPARATOR.join(ephemeral + [message])
        parts.append(PromptPart(role=self.USER_ROLE, text=user_text))

        if intent.matched_keywords:
            logger.info(f"Context keywords matched: {intent.matched_keywords}")

        return ContextPacket(
            system_prompt=self.settings.system_prompt,
            parts=parts,
            intent=intent,
            blocks=blocks
        )

    def _format_history(self, history: List[ChatMessage]) -> List[PromptPart]:
        """Map sender tags to model roles, preserving order"""
        return [
            PromptPart(
                role=self.USER_ROLE if msg.sender == "user" else self.ASSISTANT_ROLE,
                text=msg.content or ""
            )
            for msg in history
        ]

    async def _fetch_news(self, query: str) -> str:
        """Fetch news, degrading to fallback text on any failure"""
        if self.news_fetcher is None:
            return self.templates.NEWS_UNAVAILABLE

        try:
            return await asyncio.wait_for(
                self.news_fetcher.fetch(query, limit=self.settings.news_result_limit),
                timeout=self.settings.news_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning("News fetch timed out, using fallback text")
        except Exception as e:
            logger.warning(f"News fetch failed, using fallback text: {e}")

        return self.templates.NEWS_UNAVAILABLE

    @staticmethod
    def _default_clock(tz_name: str) -> Callable[[], datetime]:
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone '{tz_name}', falling back to UTC")
            tz = timezone.utc
        return lambda: datetime.now(tz)

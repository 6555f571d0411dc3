"""
Claude Client

Handles communication with the Anthropic Claude API.
"""

from typing import Any, Dict, List, Optional, Tuple
import anthropic
import logging

from config.settings import Settings
from ..context.assembler import ContextPacket

logger = logging.getLogger(__name__)


class ModelClientError(Exception):
    """Raised when the model cannot produce a response"""


class ClaudeClient:
    """
    Client for Claude API.

    Usage:
        client = ClaudeClient(settings)
        response = client.generate(context_packet)
    """

    STRUCTURED_TOOL_NAME = "structured_response"
    WRAPPED_FIELD = "result"

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        """
        Initialize Claude client.

        Args:
            settings: Application settings (API key, model, sampling)
            client: Pre-built Anthropic client, mainly for tests
        """
        self.api_key = settings.anthropic_api_key
        self.model = settings.anthropic_model
        self.max_tokens = settings.max_tokens
        self.temperature = settings.temperature
        self.client = client

        if self.client is None and self.api_key:
            self.client = anthropic.Anthropic(api_key=self.api_key)

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def generate(self, context: ContextPacket) -> str:
        """
        Generate a response using Claude.

        Args:
            context: ContextPacket with system prompt and ordered parts

        Returns:
            Generated response text

        Raises:
            ModelClientError: on missing configuration, API failure or empty output
        """
        self._require_client()

        system, messages = self._build_messages(context)

        request = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": messages,
        }
        if system:
            request["system"] = system

        try:
            response = self.client.messages.create(**request)
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise ModelClientError(f"Model request failed: {e}") from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise ModelClientError("Model returned an empty response")

        return text

    def generate_structured(self, prompt: str, schema: Dict[str, Any]) -> Any:
        """
        Generate JSON matching a caller-supplied schema.

        The model is forced to answer through a single tool whose input
        schema is `schema`, so the tool input is the structured result.
        Non-object schemas (arrays, strings) are wrapped under a "result"
        property and unwrapped on the way back.

        Args:
            prompt: Instruction for the model
            schema: JSON schema of the expected value

        Returns:
            Parsed structured response
        """
        self._require_client()

        # Tool input must be an object, so other schemas are wrapped in one
        wrapped = schema.get("type") != "object"
        input_schema = self._wrap_schema(schema) if wrapped else schema

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                tools=[{
                    "name": self.STRUCTURED_TOOL_NAME,
                    "description": "Return the answer in the requested structure.",
                    "input_schema": input_schema
                }],
                tool_choice={"type": "tool", "name": self.STRUCTURED_TOOL_NAME},
                messages=[
                    {"role": "user", "content": prompt}
                ]
            )
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise ModelClientError(f"Structured request failed: {e}") from e

        for block in response.content:
            if getattr(block, "type", None) == "tool_use":
                if not wrapped:
                    return block.input
                if self.WRAPPED_FIELD not in block.input:
                    raise ModelClientError("Model did not return structured content")
                return block.input[self.WRAPPED_FIELD]

        raise ModelClientError("Model did not return structured content")

    def _wrap_schema(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {self.WRAPPED_FIELD: schema},
            "required": [self.WRAPPED_FIELD]
        }

    def _require_client(self):
        if not self.client:
            raise ModelClientError("ANTHROPIC_API_KEY is not configured")

    def _build_messages(self, context: ContextPacket) -> Tuple[str, List[Dict[str, str]]]:
        """
        Split a packet into the system instruction and the message list.

        System parts follow the packet's own system prompt. Consecutive
        turns with the same role are merged.
        """
        system_sections = [context.system_prompt] if context.system_prompt else []
        messages = []

        for part in context.parts:
            if part.role == "system":
                system_sections.append(part.text)
                continue

            if messages and messages[-1]["role"] == part.role:
                messages[-1]["content"] += f"\n\n{part.text}"
            else:
                messages.append({"role": part.role, "content": part.text})

        return "\n\n".join(system_sections), messages

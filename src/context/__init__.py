"""
Context module - Assembles context for LLM
"""

from .assembler import ContextAssembler, ContextPacket, PromptPart, ChatMessage
from .prompts import ContextTemplates
from .store import DocumentStore

__all__ = [
    "ContextAssembler",
    "ContextPacket",
    "PromptPart",
    "ChatMessage",
    "ContextTemplates",
    "DocumentStore",
]

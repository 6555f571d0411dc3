"""
Query module - Classifies chat messages
"""

from .intent import IntentParser, QueryIntent, ContextSource

__all__ = ["IntentParser", "QueryIntent", "ContextSource"]

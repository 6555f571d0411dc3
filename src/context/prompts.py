"""
Prompt Templates

Contains the text fragments the assembler injects into prompts.
"""

from datetime import datetime


class ContextTemplates:
    """
    Templates for context blocks.
    """

    DOCUMENT_CONTEXT = "Context from document:\n{text}"

    DATETIME_CONTEXT = "Current date: {date}, time: {time}."

    NEWS_UNAVAILABLE = "News is currently unavailable."

    NEWS_EMPTY = "No recent news found for this topic."

    NEWS_HEADER = "Latest news:"

    # Separates ephemeral context fragments from each other and from the message
    SEPARATOR = "\n\n"

    def document_context(self, text: str) -> str:
        """Format uploaded document text"""
        return self.DOCUMENT_CONTEXT.format(text=text)

    def datetime_context(self, now: datetime) -> str:
        """Format a point in time as a short natural-language fragment"""
        date_str = f"{now.strftime('%A, %B')} {now.day}, {now.year}"
        time_str = now.strftime("%H:%M")

        tz_name = now.tzname()
        if tz_name:
            time_str += f" {tz_name}"

        return self.DATETIME_CONTEXT.format(date=date_str, time=time_str)

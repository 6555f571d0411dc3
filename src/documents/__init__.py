"""
Documents module - Extracts and chunks uploaded files
"""

from .loader import (
    DocumentLoader,
    DocumentError,
    UnsupportedFormatError,
    EmptyDocumentError,
    DocumentParseError,
)

__all__ = [
    "DocumentLoader",
    "DocumentError",
    "UnsupportedFormatError",
    "EmptyDocumentError",
    "DocumentParseError",
]

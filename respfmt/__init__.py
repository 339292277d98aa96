"""Normalize raw text-generation replies into chat-ready markdown."""

from .formatting import ResponseFormatter, format_response

__version__ = "0.1.0"

__all__ = ["ResponseFormatter", "__version__", "format_response"]

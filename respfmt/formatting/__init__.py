"""Response formatting pipeline: split, classify, render, space, clean up."""

from .formatter import FormatterState, ResponseFormatter, format_response
from .lines import Line, LineCategory, LineKind, classify, split_lines

__all__ = [
    "FormatterState",
    "Line",
    "LineCategory",
    "LineKind",
    "ResponseFormatter",
    "classify",
    "format_response",
    "split_lines",
]

"""Per-category line renderers."""

from __future__ import annotations

import re
from typing import List, Tuple

from .constants import ACRONYMS, CANONICAL_ACRONYMS, HIGHLIGHT_TERMS
from .lines import LineCategory, find_key_colon

# Inline code spans and URLs are never rewritten.
_PROTECTED = re.compile(r"`[^`]*`|https?://\S+", re.IGNORECASE)

_TERM_PATTERNS: Tuple[Tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"(?<![\w*]){re.escape(term)}(?![\w*])", re.IGNORECASE), rendered)
    for term, rendered in HIGHLIGHT_TERMS.items()
)
_ACRONYM_PATTERN = re.compile(
    r"(?<![\w*`])(" + "|".join(re.escape(token) for token in ACRONYMS) + r")(?![\w*`])",
    re.IGNORECASE,
)
_BOLD_KEY = re.compile(r"^\s*\*\*([^*]+?):\*\*\s*(\S.*)$")
_EMPHASIS = re.compile(r"(\*{1,2})([^*]+)\1")


def render_header(category: LineCategory) -> str:
    return f"{'#' * category.level} {category.content}"


def render_bullet(category: LineCategory) -> str:
    return f"{' ' * category.indent}- {category.content}"


def render_numbered(category: LineCategory) -> str:
    return f"{' ' * category.indent}{category.number}. {category.content}"


def render_section_title(category: LineCategory) -> str:
    return f"**{category.content}**"


def render_text(text: str) -> str:
    """Render a plain or key-value line: highlight terms, then bold the key."""
    return render_key_value(highlight_terms(text))


def highlight_terms(text: str) -> str:
    """Emphasise known phrases and wrap protocol acronyms in inline code.

    Matching is whole-word and case-insensitive. Occurrences that are already
    emphasised or already inside inline code are left untouched, which makes
    repeated application a no-op.
    """
    parts: List[str] = []
    position = 0
    for match in _PROTECTED.finditer(text):
        parts.append(_highlight_segment(text[position : match.start()]))
        parts.append(match.group(0))
        position = match.end()
    parts.append(_highlight_segment(text[position:]))
    return "".join(parts)


def _highlight_segment(segment: str) -> str:
    if not segment:
        return segment
    for pattern, rendered in _TERM_PATTERNS:
        segment = pattern.sub(rendered, segment)
    return _ACRONYM_PATTERN.sub(
        lambda match: f"`{CANONICAL_ACRONYMS[match.group(1).lower()]}`", segment
    )


def render_key_value(text: str) -> str:
    """Render ``key: value`` as ``**key**: value`` when the line qualifies."""
    bold_key = _BOLD_KEY.match(text)
    if bold_key:
        return f"**{bold_key.group(1).strip()}**: {bold_key.group(2).strip()}"

    colon = find_key_colon(text)
    if colon is None:
        return text
    key = _EMPHASIS.sub(r"\2", text[:colon]).strip()
    value = text[colon + 1 :].strip()
    if not key or not value:
        return text
    return f"**{key}**: {value}"


__all__ = [
    "highlight_terms",
    "render_bullet",
    "render_header",
    "render_key_value",
    "render_numbered",
    "render_section_title",
    "render_text",
]

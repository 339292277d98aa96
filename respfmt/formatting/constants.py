"""Fixed lookup tables used by the response formatter."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

SECTION_TITLES: frozenset[str] = frozenset(
    title.lower()
    for title in (
        "Key Information Extracted",
        "Email Summary",
        "Diagnostic Recommendations",
        "Suggested Queries",
        "Next Steps",
        "Summary",
        "Analysis",
        "Recommendation",
        "Ticket Categorization",
        "Suggested Diagnostic Steps",
        "Business Impact",
        "Root Cause Analysis",
        "Resolution Steps",
        "Follow-up Actions",
    )
)

# Applied in insertion order.
HIGHLIGHT_TERMS: Mapping[str, str] = MappingProxyType(
    {
        "High Priority": "**High Priority**",
        "Critical": "**Critical**",
        "Urgent": "**Urgent**",
        "Error": "**Error**",
        "Failed": "**Failed**",
        "Issue": "**Issue**",
        "Problem": "**Problem**",
        "Recommended": "*Recommended*",
        "Suggestion": "*Suggestion*",
        "Next Steps": "**Next Steps**",
        "Action Required": "**Action Required**",
    }
)

ACRONYMS: tuple[str, ...] = (
    "API",
    "URL",
    "HTTP",
    "JSON",
    "XML",
    "SQL",
    "SSO",
    "SAML",
    "OAuth",
    "JWT",
    "SSL",
    "TLS",
)

# Lower-cased token -> canonical spelling.
CANONICAL_ACRONYMS: Mapping[str, str] = MappingProxyType(
    {acronym.lower(): acronym for acronym in ACRONYMS}
)

BULLET_GLYPHS = "•·‣⁃"
CODE_FENCE = "```"
KEY_MAX_COLON_INDEX = 50
SECTION_TITLE_MIN_LENGTH = 4
SECTION_TITLE_MAX_LENGTH = 49


__all__ = [
    "ACRONYMS",
    "BULLET_GLYPHS",
    "CANONICAL_ACRONYMS",
    "CODE_FENCE",
    "HIGHLIGHT_TERMS",
    "KEY_MAX_COLON_INDEX",
    "SECTION_TITLES",
    "SECTION_TITLE_MAX_LENGTH",
    "SECTION_TITLE_MIN_LENGTH",
]

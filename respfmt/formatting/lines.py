"""Line splitting and per-line classification for the response formatter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .constants import (
    BULLET_GLYPHS,
    CODE_FENCE,
    KEY_MAX_COLON_INDEX,
    SECTION_TITLE_MAX_LENGTH,
    SECTION_TITLE_MIN_LENGTH,
    SECTION_TITLES,
)

_HASH_HEADER = re.compile(r"^(#{1,3}) (.*)$")
_GLYPH_BULLET = re.compile(rf"^[{BULLET_GLYPHS}]\s")
_NUMBERED = re.compile(r"^(\d+)\.\s+(.*)$")
_BOLD_WRAPPED = re.compile(r"^\*\*([^*]+)\*\*$")
_BOLD_BEFORE_COLON = re.compile(r"^\*\*([^*]+)\*\*:$")
_BULLET_PREFIXES = ("- ", "• ", "* ")


@dataclass(frozen=True)
class Line:
    """A single input line.

    ``text`` is right-trimmed and drives classification; ``raw`` only loses a
    trailing carriage return and is what fenced code reproduces.
    """

    index: int
    text: str
    raw: str

    @property
    def stripped(self) -> str:
        return self.text.strip()

    @property
    def indent(self) -> int:
        return len(self.text) - len(self.text.lstrip())


class LineKind(str, Enum):
    CODE_FENCE = "code_fence"
    HEADER = "header"
    BULLET = "bullet"
    NUMBERED = "numbered"
    SECTION_TITLE = "section_title"
    KEY_VALUE = "key_value"
    BLANK = "blank"
    PLAIN = "plain"


@dataclass(frozen=True)
class LineCategory:
    """Classification result with the payload each renderer needs."""

    kind: LineKind
    content: str = ""
    indent: int = 0
    level: int = 0
    number: Optional[str] = None

    @property
    def is_list_item(self) -> bool:
        return self.kind in (LineKind.BULLET, LineKind.NUMBERED)


def split_lines(raw: str) -> List[Line]:
    """Split ``raw`` on newlines, keeping order and dropping trailing whitespace."""
    lines: List[Line] = []
    for index, chunk in enumerate(raw.split("\n")):
        raw_line = chunk[:-1] if chunk.endswith("\r") else chunk
        lines.append(Line(index=index, text=chunk.rstrip(), raw=raw_line))
    return lines


def is_code_fence(line: Line) -> bool:
    return line.stripped.startswith(CODE_FENCE)


def classify(line: Line) -> LineCategory:
    """Assign a category from the line's own content, first match wins.

    Code-block membership depends on earlier lines and is tracked by the
    formatter; a fence is still reported here so callers can toggle on it.
    """
    stripped = line.stripped
    if stripped.startswith(CODE_FENCE):
        return LineCategory(LineKind.CODE_FENCE, content=line.text)
    if not stripped:
        return LineCategory(LineKind.BLANK)

    header = _match_header(stripped)
    if header is not None:
        return header

    if stripped.startswith(_BULLET_PREFIXES):
        return LineCategory(LineKind.BULLET, content=stripped[2:].strip(), indent=line.indent)
    if _GLYPH_BULLET.match(stripped):
        return LineCategory(LineKind.BULLET, content=stripped[1:].strip(), indent=line.indent)

    numbered = _NUMBERED.match(stripped)
    if numbered:
        return LineCategory(
            LineKind.NUMBERED,
            content=numbered.group(2),
            indent=line.indent,
            number=numbered.group(1),
        )

    title = _section_title(stripped)
    if title is not None:
        return LineCategory(LineKind.SECTION_TITLE, content=title)

    if find_key_colon(line.text) is not None:
        return LineCategory(LineKind.KEY_VALUE, content=line.text)
    return LineCategory(LineKind.PLAIN, content=line.text)


def find_key_colon(text: str) -> Optional[int]:
    """Return the index of the colon splitting ``text`` into key and value."""
    if text.lstrip().startswith("http"):
        return None
    colon = text.find(":")
    if colon <= 0 or colon >= KEY_MAX_COLON_INDEX or colon == len(text) - 1:
        return None
    if text.startswith("//", colon + 1):
        return None
    return colon


def _match_header(stripped: str) -> Optional[LineCategory]:
    for marker, level in (("===", 1), ("---", 2)):
        if stripped.startswith(marker) and stripped.endswith(marker):
            title = stripped.strip(marker[0]).strip()
            # A bare rule such as "---" carries no title and is not a header.
            if title:
                return LineCategory(LineKind.HEADER, content=title, level=level)
            return None

    match = _HASH_HEADER.match(stripped)
    if match:
        return LineCategory(LineKind.HEADER, content=match.group(2), level=len(match.group(1)))
    return None


def _section_title(stripped: str) -> Optional[str]:
    wrapped = _BOLD_WRAPPED.match(stripped)
    bold_before_colon = _BOLD_BEFORE_COLON.match(stripped)
    if wrapped:
        candidate = wrapped.group(1).strip()
    elif bold_before_colon:
        candidate = bold_before_colon.group(1).strip() + ":"
    else:
        candidate = stripped
    if candidate.lower() in SECTION_TITLES:
        return candidate
    if (
        candidate.endswith(":")
        and SECTION_TITLE_MIN_LENGTH <= len(candidate) <= SECTION_TITLE_MAX_LENGTH
    ):
        return candidate
    return None


__all__ = [
    "Line",
    "LineCategory",
    "LineKind",
    "classify",
    "find_key_colon",
    "is_code_fence",
    "split_lines",
]

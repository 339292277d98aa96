"""Final spacing pass over the assembled formatter output."""

from __future__ import annotations

import re
from typing import List, Sequence

from .constants import CODE_FENCE

_HEADER_LINE = re.compile(r"^#{1,3}(?!#)")
_BOLD_TITLE_LINE = re.compile(r"^\*\*[^*]+\*\*$")


def cleanup(lines: Sequence[str]) -> str:
    """Collapse blank runs and make sure headings are preceded by a blank line.

    Fenced code is copied through untouched, including its blank lines.
    """
    cleaned: List[str] = []
    in_code = False
    previous_blank = False

    for line in lines:
        if line.strip().startswith(CODE_FENCE):
            in_code = not in_code
            cleaned.append(line)
            previous_blank = False
            continue

        if in_code:
            cleaned.append(line)
            previous_blank = False
            continue

        if not line.strip():
            if previous_blank:
                continue
            cleaned.append("")
            previous_blank = True
            continue

        if cleaned and not previous_blank and _needs_leading_blank(line):
            cleaned.append("")

        cleaned.append(line)
        previous_blank = False

    return "\n".join(cleaned).strip()


def _needs_leading_blank(line: str) -> bool:
    return bool(_HEADER_LINE.match(line) or _BOLD_TITLE_LINE.match(line))


__all__ = ["cleanup"]

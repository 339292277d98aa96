"""Normalizes raw model replies into consistently structured markdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .cleanup import cleanup
from .lines import LineKind, classify, is_code_fence, split_lines
from .render import (
    render_bullet,
    render_header,
    render_numbered,
    render_section_title,
    render_text,
)


@dataclass
class FormatterState:
    """Spacing state threaded through a single ``format`` call."""

    in_code_block: bool = False
    in_list: bool = False
    previous_was_empty: bool = False
    output: List[str] = field(default_factory=list)

    def separate(self) -> None:
        """Insert a blank separator unless at the start or right after a blank."""
        if self.output and not self.previous_was_empty:
            self.output.append("")

    def blank(self) -> None:
        if self.output and not self.previous_was_empty:
            self.output.append("")
            self.previous_was_empty = True
        self.in_list = False

    def emit(self, text: str, *, list_item: bool = False) -> None:
        self.output.append(text)
        self.previous_was_empty = False
        self.in_list = list_item


class ResponseFormatter:
    """Rewrites loosely structured text into chat-ready markdown.

    Each line is classified on its own content and rendered, while a
    per-call ``FormatterState`` decides where blank separators belong.
    Instances hold no state between calls and may be shared across threads.
    """

    def format(self, raw: str) -> str:
        if not raw or not raw.strip():
            return raw

        state = FormatterState()
        for line in split_lines(raw):
            if is_code_fence(line):
                state.in_code_block = not state.in_code_block
                state.emit(line.text)
                continue

            if state.in_code_block:
                state.emit(line.raw)
                continue

            category = classify(line)
            kind = category.kind

            if kind is LineKind.BLANK:
                state.blank()
            elif kind is LineKind.HEADER:
                state.separate()
                state.emit(render_header(category))
            elif category.is_list_item:
                if not state.in_list:
                    state.separate()
                if kind is LineKind.BULLET:
                    state.emit(render_bullet(category), list_item=True)
                else:
                    state.emit(render_numbered(category), list_item=True)
            elif kind is LineKind.SECTION_TITLE:
                state.separate()
                state.emit(render_section_title(category))
            else:
                if state.in_list:
                    state.separate()
                state.emit(render_text(category.content))

        return cleanup(state.output)


_DEFAULT_FORMATTER = ResponseFormatter()


def format_response(raw: str) -> str:
    """Format ``raw`` with a shared, stateless ``ResponseFormatter``."""
    return _DEFAULT_FORMATTER.format(raw)


__all__ = ["FormatterState", "ResponseFormatter", "format_response"]

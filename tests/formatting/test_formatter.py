"""Behaviour tests for the response formatter."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from respfmt import format_response
from respfmt.formatting import FormatterState, ResponseFormatter

TICKET_REPLY = (
    "=== Ticket Report ===\n"
    "Summary\n"
    "The login API failed for SSO users.\n"
    "Severity: High\n"
    "Next Steps:\n"
    "• Check the SAML certificate\n"
    "1. Rotate the JWT signing key\n"
    "\n\n\n"
    "```bash\n"
    "curl -s https://example.com/api  \n"
    "```\n"
    "Recommended: monitor the error rate"
)

TICKET_FORMATTED = (
    "# Ticket Report\n"
    "\n"
    "**Summary**\n"
    "The login `API` **Failed** for `SSO` users.\n"
    "**Severity**: High\n"
    "\n"
    "**Next Steps:**\n"
    "\n"
    "- Check the SAML certificate\n"
    "1. Rotate the JWT signing key\n"
    "\n"
    "```bash\n"
    "curl -s https://example.com/api  \n"
    "```\n"
    "**Recommended**: monitor the **Error** rate"
)


@pytest.mark.parametrize("raw", ["", "   ", "\n\n", " \t\n "])
def test_empty_or_whitespace_input_is_returned_unchanged(
    formatter: ResponseFormatter, raw: str
) -> None:
    assert formatter.format(raw) == raw


def test_equals_wrapped_title_becomes_h1(formatter: ResponseFormatter) -> None:
    assert formatter.format("=== Summary ===") == "# Summary"


def test_consecutive_bullets_stay_together(formatter: ResponseFormatter) -> None:
    assert formatter.format("- item one\n- item two") == "- item one\n- item two"


def test_key_value_line(formatter: ResponseFormatter) -> None:
    assert formatter.format("Severity: High") == "**Severity**: High"


def test_acronyms_are_code_formatted(formatter: ResponseFormatter) -> None:
    result = formatter.format("Please check the API and URL")
    assert "`API`" in result
    assert "`URL`" in result


def test_section_title(formatter: ResponseFormatter) -> None:
    assert formatter.format("Summary") == "**Summary**"
    assert formatter.format("Intro text\nSummary") == "Intro text\n\n**Summary**"


def test_full_reply(formatter: ResponseFormatter) -> None:
    assert formatter.format(TICKET_REPLY) == TICKET_FORMATTED


def test_formatting_is_idempotent(formatter: ResponseFormatter) -> None:
    once = formatter.format(TICKET_REPLY)
    assert formatter.format(once) == once


def test_fenced_code_is_reproduced_verbatim(formatter: ResponseFormatter) -> None:
    raw = (
        "Run this:\n"
        "```python\n"
        "  def f():  \n"
        "      return 1   \n"
        "\n"
        "\n"
        "# comment\n"
        "- not a bullet\n"
        "Key: value\n"
        "```\n"
        "Done"
    )
    expected = (
        "**Run this:**\n"
        "```python\n"
        "  def f():  \n"
        "      return 1   \n"
        "\n"
        "\n"
        "# comment\n"
        "- not a bullet\n"
        "Key: value\n"
        "```\n"
        "Done"
    )
    assert formatter.format(raw) == expected


def test_unterminated_fence_runs_to_end_of_input(formatter: ResponseFormatter) -> None:
    raw = "```\n# header\n- item\nKey: value"
    assert formatter.format(raw) == raw


def test_crlf_input(formatter: ResponseFormatter) -> None:
    raw = "Status: Open\r\nOwner: Ops\r\n"
    assert formatter.format(raw) == "**Status**: Open\n**Owner**: Ops"


def test_blank_runs_collapse(formatter: ResponseFormatter) -> None:
    result = formatter.format("alpha\n\n\n\n\nbeta\n \n\t\ngamma")
    assert result == "alpha\n\nbeta\n\ngamma"


def test_header_gets_leading_separator(formatter: ResponseFormatter) -> None:
    assert formatter.format("Intro\n--- Details ---\nBody") == "Intro\n\n## Details\nBody"
    assert formatter.format("# Title\nBody") == "# Title\nBody"


def test_list_is_separated_from_surrounding_text(formatter: ResponseFormatter) -> None:
    raw = "Steps below\n1. Restart\n2.   Verify\nThanks"
    assert formatter.format(raw) == "Steps below\n\n1. Restart\n2. Verify\n\nThanks"


def test_nested_bullets_keep_indentation(formatter: ResponseFormatter) -> None:
    raw = "- parent\n  * child\n    • grandchild"
    assert formatter.format(raw) == "- parent\n  - child\n    - grandchild"


def test_bullet_with_colon_is_not_a_key_value(formatter: ResponseFormatter) -> None:
    assert formatter.format("- Severity: High") == "- Severity: High"


def test_section_title_ends_a_list(formatter: ResponseFormatter) -> None:
    raw = "- a\nNext Steps\n- b"
    assert formatter.format(raw) == "- a\n\n**Next Steps**\n\n- b"


def test_horizontal_rule_passes_through(formatter: ResponseFormatter) -> None:
    assert formatter.format("Above\n---\nBelow") == "Above\n---\nBelow"


def test_format_response_matches_instance(formatter: ResponseFormatter) -> None:
    assert format_response(TICKET_REPLY) == formatter.format(TICKET_REPLY)


def test_concurrent_calls_do_not_share_state(formatter: ResponseFormatter) -> None:
    inputs = [TICKET_REPLY, "```\nopen fence", "- a\n- b", "Severity: High"] * 25
    expected = [ResponseFormatter().format(raw) for raw in inputs]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(formatter.format, inputs))
    assert results == expected


def test_formatter_state_separator_rules() -> None:
    state = FormatterState()
    state.separate()
    assert state.output == []

    state.emit("- item", list_item=True)
    assert state.in_list is True
    state.blank()
    state.blank()
    assert state.output == ["- item", ""]
    assert state.in_list is False
    assert state.previous_was_empty is True

    state.separate()
    assert state.output == ["- item", ""]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("**Next Steps**:", "**Next Steps:**"),
        ("Intro\n**Summary**:\n- a", "Intro\n\n**Summary:**\n\n- a"),
        ("**Open items:**\n1. Rotate keys", "**Open items:**\n\n1. Rotate keys"),
        ("**Hi**:", "**Hi**:"),
    ],
)
def test_bold_titles_are_not_rewrapped(
    formatter: ResponseFormatter, raw: str, expected: str
) -> None:
    once = formatter.format(raw)
    assert once == expected
    assert formatter.format(once) == once

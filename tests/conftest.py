from __future__ import annotations

import pytest

from respfmt.formatting import ResponseFormatter


@pytest.fixture
def formatter() -> ResponseFormatter:
    """Provide a fresh formatter instance."""
    return ResponseFormatter()

"""
Shared pytest fixtures for DiffVault backend tests.

Provides:
  - explicit test Settings (small limits, console logging)
  - FastAPI test app built from those settings
  - async HTTP client bound to the app via ASGITransport
  - helpers that check the structural invariants of a DiffResult
"""
from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from diffvault.config.settings import Environment, Settings
from diffvault.main import create_app
from diffvault.schemas.diff import DiffResult, UnchangedLine


# ─── Settings override ────────────────────────────────────────────────────────

TEST_SETTINGS = Settings(
    _env_file=None,
    environment=Environment.TESTING,
    debug=True,
    max_file_size_bytes=4096,
    cors_origins=["http://localhost:3000"],
    log_json=False,
)


# ─── App & HTTP client ────────────────────────────────────────────────────────

@pytest.fixture
def app():
    """Create a FastAPI test app from TEST_SETTINGS."""
    return create_app(settings=TEST_SETTINGS)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


# ─── Invariant helpers ────────────────────────────────────────────────────────

def lines_of(text: str) -> list[str]:
    """Reference tokenizer: split on newline, drop the terminator's empty tail."""
    if text == "":
        return []
    parts = text.split("\n")
    return parts[:-1] if parts[-1] == "" else parts


def original_side(result: DiffResult) -> list[str]:
    out = []
    for chunk in result.chunks:
        for line in chunk.lines:
            if line.type == "removed":
                out.append(line.content)
            elif isinstance(line, UnchangedLine):
                out.append(line.left_content)
    return out


def modified_side(result: DiffResult) -> list[str]:
    return [
        line.content
        for chunk in result.chunks
        for line in chunk.lines
        if line.type in ("added", "unchanged")
    ]


def assert_consistent(result: DiffResult) -> None:
    """Check counts, numbering and chunk homogeneity of a DiffResult."""
    stats = result.stats
    assert stats.total == stats.added + stats.removed + stats.unchanged
    assert result.original_line_count == stats.removed + stats.unchanged
    assert result.modified_line_count == stats.added + stats.unchanged

    expected_left = 1
    expected_right = 1
    for chunk in result.chunks:
        assert chunk.lines
        kinds = {line.type for line in chunk.lines}
        assert len(kinds) == 1
        assert chunk.is_unchanged == (kinds == {"unchanged"})
        for line in chunk.lines:
            if line.line_number.left is not None:
                assert line.line_number.left == expected_left
                expected_left += 1
            if line.line_number.right is not None:
                assert line.line_number.right == expected_right
                expected_right += 1

    assert expected_left - 1 == result.original_line_count
    assert expected_right - 1 == result.modified_line_count

"""Integration tests — diff endpoints."""
import io

import pytest

pytestmark = pytest.mark.asyncio


def _text_files(original: bytes, modified: bytes, names=("original.txt", "modified.txt")):
    return {
        "original": (names[0], io.BytesIO(original), "text/plain"),
        "modified": (names[1], io.BytesIO(modified), "text/plain"),
    }


# ─── POST /diff ───────────────────────────────────────────────────────────────

async def test_diff_returns_camel_case_result(client):
    resp = await client.post(
        "/api/v1/diff",
        json={"original": "hello\nworld\n", "modified": "hello\nearth\n"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["stats"] == {"added": 1, "removed": 1, "unchanged": 1, "total": 3}
    assert body["originalLineCount"] == 2
    assert body["modifiedLineCount"] == 2

    first, removed, added = body["chunks"]
    assert first["isUnchanged"] is True
    assert first["lines"][0] == {
        "type": "unchanged",
        "content": "hello",
        "lineNumber": {"left": 1, "right": 1},
    }
    assert removed["lines"][0] == {
        "type": "removed",
        "content": "world",
        "lineNumber": {"left": 2, "right": None},
    }
    assert added["lines"][0]["type"] == "added"
    assert added["lines"][0]["lineNumber"] == {"left": None, "right": 2}


async def test_diff_ignore_whitespace(client):
    resp = await client.post(
        "/api/v1/diff",
        json={"original": "  hello\n", "modified": "hello\n", "ignoreWhitespace": True},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["stats"]["unchanged"] == 1
    line = body["chunks"][0]["lines"][0]
    assert line["content"] == "hello"
    assert line["originalContent"] == "  hello"


async def test_diff_of_empty_texts(client):
    resp = await client.post("/api/v1/diff", json={"original": "", "modified": ""})
    assert resp.status_code == 200
    assert resp.json()["chunks"] == []


async def test_diff_rejects_non_string_input(client):
    resp = await client.post("/api/v1/diff", json={"original": 42, "modified": "a"})
    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "GEN_001"
    assert error["detail"]["errors"][0]["loc"] == ["body", "original"]


async def test_diff_rejects_missing_field(client):
    resp = await client.post("/api/v1/diff", json={"original": "a"})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "GEN_001"


async def test_diff_rejects_oversized_input(client):
    resp = await client.post(
        "/api/v1/diff",
        json={"original": "a" * 5000, "modified": "b" * 5000},
    )
    assert resp.status_code == 413
    error = resp.json()["error"]
    assert error["code"] == "DIFF_002"
    assert error["message"] == (
        "Inputs are too large (0.01 MB). Maximum combined size is 0.01 MB."
    )
    assert error["detail"] == {"size_bytes": 10000, "limit_bytes": 8192}


# ─── POST /diff/inline ────────────────────────────────────────────────────────

async def test_inline_diff_segments(client):
    resp = await client.post(
        "/api/v1/diff/inline",
        json={"oldLine": "abc", "newLine": "xyz"},
    )
    assert resp.status_code == 200
    assert resp.json()["segments"] == [
        {"type": "removed", "value": "abc"},
        {"type": "added", "value": "xyz"},
    ]


async def test_inline_diff_identical_lines(client):
    resp = await client.post(
        "/api/v1/diff/inline",
        json={"oldLine": "same", "newLine": "same"},
    )
    assert resp.json()["segments"] == [{"type": "equal", "value": "same"}]


async def test_inline_diff_rejects_oversized_input(client):
    resp = await client.post(
        "/api/v1/diff/inline",
        json={"oldLine": "a" * 8000, "newLine": "b" * 1000},
    )
    assert resp.status_code == 413


# ─── POST /diff/files ─────────────────────────────────────────────────────────

async def test_file_diff(client):
    resp = await client.post(
        "/api/v1/diff/files",
        files=_text_files(b"a\nb\n", b"a\nc\n", names=("old.py", "new.py")),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["result"]["stats"]["added"] == 1
    assert body["result"]["stats"]["removed"] == 1
    assert body["originalFile"] == {
        "filename": "old.py",
        "extension": ".py",
        "language": "python",
        "sizeBytes": 4,
    }
    assert body["modifiedFile"]["filename"] == "new.py"


async def test_file_diff_honours_ignore_whitespace_form_field(client):
    resp = await client.post(
        "/api/v1/diff/files",
        files=_text_files(b"  a\n", b"a\n"),
        data={"ignoreWhitespace": "true"},
    )
    assert resp.status_code == 200
    assert resp.json()["result"]["stats"]["unchanged"] == 1


async def test_file_diff_rejects_unsupported_type(client):
    resp = await client.post(
        "/api/v1/diff/files",
        files=_text_files(b"a", b"b", names=("photo.png", "modified.txt")),
    )
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "FILE_001"


async def test_file_diff_rejects_oversized_file(client):
    resp = await client.post(
        "/api/v1/diff/files",
        files=_text_files(b"a" * 5000, b"b"),
    )
    assert resp.status_code == 413
    assert resp.json()["error"]["code"] == "FILE_002"


async def test_file_diff_rejects_binary_content(client):
    resp = await client.post(
        "/api/v1/diff/files",
        files=_text_files(b"\xff\xfe\x00binary", b"text"),
    )
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "FILE_003"


async def test_file_diff_requires_both_files(client):
    files = {"original": ("a.txt", io.BytesIO(b"a"), "text/plain")}
    resp = await client.post("/api/v1/diff/files", files=files)
    assert resp.status_code == 422


# ─── GET /diff/limits ─────────────────────────────────────────────────────────

async def test_limits_reflect_settings(client):
    resp = await client.get("/api/v1/diff/limits")
    assert resp.status_code == 200
    body = resp.json()
    assert body["maxFileSizeBytes"] == 4096
    assert body["maxDiffInputBytes"] == 8192
    assert ".txt" in body["supportedFileExtensions"]


# ─── Service endpoints & middleware ───────────────────────────────────────────

async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "version": "1.0.0"}


async def test_metrics_exposes_diff_counters(client):
    await client.post("/api/v1/diff", json={"original": "a", "modified": "b"})
    resp = await client.get("/metrics")
    assert resp.status_code == 200
    assert "diffvault_diffs_computed_total" in resp.text


async def test_correlation_id_is_echoed(client):
    resp = await client.get("/health", headers={"X-Correlation-ID": "test-123"})
    assert resp.headers["X-Correlation-ID"] == "test-123"


async def test_correlation_id_is_generated(client):
    resp = await client.get("/health")
    assert resp.headers.get("X-Correlation-ID")


async def test_security_headers(client):
    resp = await client.get("/health")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["Cache-Control"] == "no-store"

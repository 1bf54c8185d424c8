import json
from pathlib import Path

import pytest

from infrastructure.transcript import (
    JsonlTranscriptSource,
    extract_user_messages,
    parse_transcript,
    resolve_content,
)


def _jsonl(*entries) -> str:
    return "\n".join(entry if isinstance(entry, str) else json.dumps(entry) for entry in entries)


def test_parse_transcript_skips_blank_and_malformed_lines():
    jsonl = _jsonl(
        {"type": "session", "id": "sess1"},
        "",
        "not valid json",
        {"type": "message", "id": "m1", "role": "user", "content": "Hello"},
        "[1, 2]",
    )

    entries = parse_transcript(jsonl)

    assert [entry["type"] for entry in entries] == ["session", "message"]
    assert parse_transcript("") == []


def test_extract_user_messages_ignores_other_roles_and_entry_types():
    jsonl = _jsonl(
        {"type": "session", "id": "sess1"},
        {"type": "message", "role": "user", "content": "Real request"},
        {"type": "message", "role": "assistant", "content": "Response"},
        {"type": "custom_message", "role": "user", "content": "Injected"},
        {"type": "compaction", "content": "Summary"},
        {"type": "message", "role": "user", "content": ""},
        {"type": "message", "role": "user", "content": "Another request"},
    )

    assert extract_user_messages(jsonl) == ["Real request", "Another request"]


def test_extract_user_messages_respects_limit():
    jsonl = _jsonl(*({"type": "message", "role": "user", "content": word} for word in ["First", "Second", "Third"]))
    assert extract_user_messages(jsonl, limit=2) == ["First", "Second"]


def test_resolve_content_joins_multimodal_text_parts():
    content = [
        {"type": "text", "text": "Look at this"},
        {"type": "image", "url": "https://example.com/cat.png"},
        {"type": "text", "text": "screenshot"},
        "stray",
    ]
    assert resolve_content(content) == "Look at this screenshot"
    assert resolve_content({"unexpected": True}) == ""


@pytest.mark.anyio
async def test_file_source_counts_and_reads_user_turns(tmp_path: Path):
    path = tmp_path / "test-session-001.jsonl"
    path.write_text(
        _jsonl(
            {"type": "session", "id": "test-session-001"},
            {"type": "message", "role": "user", "content": "Set up CI"},
            {"type": "message", "role": "assistant", "content": "Sure"},
            {"type": "message", "role": "user", "content": [{"type": "text", "text": "Add caching"}]},
            {"type": "message", "role": "user", "content": "Fix flaky tests"},
        )
        + "\n",
        encoding="utf-8",
    )
    source = JsonlTranscriptSource(path)

    assert source.session_id == "test-session-001"
    assert source.exists()
    assert await source.count_user_turns() == 3
    assert await source.count_user_turns(limit=2) == 2
    assert await source.read_user_turns(limit=2) == ["Set up CI", "Add caching"]


@pytest.mark.anyio
async def test_file_source_raises_for_missing_file(tmp_path: Path):
    source = JsonlTranscriptSource(tmp_path / "missing.jsonl")
    assert not source.exists()
    with pytest.raises(FileNotFoundError):
        await source.read_user_turns()

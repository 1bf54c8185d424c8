import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from infrastructure.storage import SessionJsonStore
from schemas import LabelSource, SessionLabel


def _write_sessions(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _label(text: str = "Checkout Tax Setup") -> SessionLabel:
    return SessionLabel(
        text=text,
        source=LabelSource.GENERATED,
        turn_threshold=3,
        updated_at=datetime(2026, 2, 11, 12, 0, tzinfo=timezone.utc),
    )


@pytest.mark.anyio
async def test_set_label_preserves_existing_session_fields(tmp_path: Path):
    path = tmp_path / "sessions.json"
    _write_sessions(
        path,
        {"agent:main:main": {"sessionId": "s-123", "updatedAt": "2026-02-11T00:00:00Z"}},
    )

    await SessionJsonStore(path).set_label("agent:main:main", _label())

    entry = json.loads(path.read_text(encoding="utf-8"))["agent:main:main"]
    assert entry["sessionId"] == "s-123"
    assert entry["updatedAt"] == "2026-02-11T00:00:00Z"
    assert entry["label"] == "Checkout Tax Setup"
    assert entry["label_source"] == "generated"
    assert entry["label_turn"] == 3


@pytest.mark.anyio
async def test_get_label_returns_none_without_label_fields(tmp_path: Path):
    path = tmp_path / "sessions.json"
    _write_sessions(path, {"agent:main:main": {"sessionId": "s-123"}})

    assert await SessionJsonStore(path).get_label("agent:main:main") is None
    assert await SessionJsonStore(path).get_label("agent:other") is None


@pytest.mark.anyio
async def test_get_label_reads_existing_metadata(tmp_path: Path):
    path = tmp_path / "sessions.json"
    _write_sessions(
        path,
        {
            "agent:main:main": {
                "sessionId": "s-123",
                "label": "Woo Shipping Config",
                "label_source": "manual",
                "label_turn": 7,
                "label_version": "1.1",
                "label_updated_at": "2026-02-11T13:00:00Z",
            }
        },
    )

    label = await SessionJsonStore(path).get_label("agent:main:main")

    assert label is not None
    assert label.text == "Woo Shipping Config"
    assert label.source == LabelSource.MANUAL
    assert label.turn_threshold == 7
    assert label.schema_version == "1.1"


@pytest.mark.anyio
async def test_get_label_fills_defaults_for_partial_metadata(tmp_path: Path):
    path = tmp_path / "sessions.json"
    _write_sessions(path, {"agent:main:main": {"sessionId": "s-1", "label": "Bare Label"}})

    label = await SessionJsonStore(path).get_label("agent:main:main")

    assert label.text == "Bare Label"
    assert label.source == LabelSource.GENERATED
    assert label.schema_version == "1.0"


@pytest.mark.anyio
async def test_manual_entry_is_not_replaced_without_request(tmp_path: Path):
    path = tmp_path / "sessions.json"
    _write_sessions(
        path,
        {"agent:main:main": {"sessionId": "s-1", "label": "Mine", "label_source": "manual"}},
    )
    store = SessionJsonStore(path)

    assert await store.set_label("agent:main:main", _label(), replace_existing=False) is False
    assert (await store.get_label("agent:main:main")).text == "Mine"



@pytest.mark.anyio
async def test_unlabeled_entry_accepts_label_when_replacement_not_requested(tmp_path: Path):
    path = tmp_path / "sessions.json"
    _write_sessions(path, {"agent:main:main": {"sessionId": "s-1"}})
    store = SessionJsonStore(path)

    assert await store.set_label("agent:main:main", _label(), replace_existing=False) is True
    assert await store.set_label("agent:main:main", _label(), replace_existing=False) is False
    entry = json.loads(path.read_text(encoding="utf-8"))["agent:main:main"]
    assert entry["sessionId"] == "s-1"
    assert entry["label"] == "Checkout Tax Setup"

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class TurnSource(Protocol):
    """Ordered user turns of one session."""

    async def count_user_turns(self, limit: Optional[int] = None) -> int:
        """Number of user turns, counting stops early once ``limit`` is reached."""

    async def read_user_turns(self, limit: Optional[int] = None) -> List[str]:
        """The first ``limit`` user turns (all when ``limit`` is None)."""


def parse_transcript(jsonl: str) -> List[Dict[str, Any]]:
    """Parse a JSONL transcript, skipping blank and malformed lines."""
    entries: List[Dict[str, Any]] = []
    for line in (jsonl or "").split("\n"):
        entry = _parse_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def extract_user_messages(jsonl: str, limit: Optional[int] = None) -> List[str]:
    return _collect_user_messages((jsonl or "").split("\n"), limit)


def resolve_content(content: Any) -> str:
    """Flatten message content: plain strings, or the text parts of a multimodal list."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [
            part["text"]
            for part in content
            if isinstance(part, dict)
            and part.get("type") == "text"
            and isinstance(part.get("text"), str)
        ]
        return " ".join(parts)
    return ""


def _parse_line(line: str) -> Optional[Dict[str, Any]]:
    trimmed = line.strip()
    if not trimmed:
        return None
    try:
        entry = json.loads(trimmed)
    except ValueError:
        return None
    return entry if isinstance(entry, dict) else None


def _user_text(entry: Dict[str, Any]) -> str:
    # custom_message, compaction and other entry types are not user turns.
    if entry.get("type") != "message" or entry.get("role") != "user":
        return ""
    return resolve_content(entry.get("content"))


def _collect_user_messages(lines: Iterable[str], limit: Optional[int]) -> List[str]:
    messages: List[str] = []
    for line in lines:
        if limit is not None and len(messages) >= limit:
            break
        entry = _parse_line(line)
        if entry is None:
            continue
        text = _user_text(entry)
        if text:
            messages.append(text)
    return messages


class JsonlTranscriptSource:
    """Reads user turns from a session transcript file without loading it whole."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def session_id(self) -> str:
        return self._path.stem

    def exists(self) -> bool:
        return self._path.is_file()

    async def count_user_turns(self, limit: Optional[int] = None) -> int:
        turns = await self.read_user_turns(limit)
        return len(turns)

    async def read_user_turns(self, limit: Optional[int] = None) -> List[str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_user_turns, limit)

    def _read_user_turns(self, limit: Optional[int]) -> List[str]:
        with open(self._path, "r", encoding="utf-8", errors="replace") as file:
            messages = _collect_user_messages(file, limit)
        logger.debug("Read %s user turns from %s", len(messages), self._path)
        return messages

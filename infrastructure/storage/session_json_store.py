from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from infrastructure.storage.json_file import JsonFileStore, JsonMapping
from infrastructure.storage.labels_json_store import has_label_entry, parse_label
from schemas.session_label import SessionLabel

logger = logging.getLogger(__name__)

SESSIONS_FILE_NAME = "sessions.json"

_LABEL_FIELDS = ("label", "label_source", "label_turn", "label_version", "label_updated_at")


def sessions_path_from_sessions_dir(sessions_dir: Union[str, Path]) -> Path:
    return Path(sessions_dir) / SESSIONS_FILE_NAME


class SessionJsonStore:
    """
    Stores labels as extra fields on entries of the host's session index.

    The index file belongs to the host, so only the label fields of an entry
    are touched and every other field is written back as read.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._file = JsonFileStore(path)

    @property
    def path(self) -> Path:
        return self._file.path

    async def get_entry(self, key: str) -> Optional[Dict[str, Any]]:
        data = await self._file.read()
        entry = data.get(key)
        return entry if isinstance(entry, dict) else None

    async def get_label(self, key: str) -> Optional[SessionLabel]:
        entry = await self.get_entry(key)
        if not entry:
            return None
        label_text = entry.get("label")
        if not isinstance(label_text, str) or not label_text:
            return None
        return parse_label({field: entry[field] for field in _LABEL_FIELDS if field in entry})

    async def set_label(
        self,
        key: str,
        label: SessionLabel,
        *,
        replace_existing: bool = True,
    ) -> bool:
        def _apply(data: JsonMapping) -> bool:
            entry = data.get(key)
            if not isinstance(entry, dict):
                entry = {}
            if not replace_existing and has_label_entry(entry):
                logger.info("Keeping existing label for %s", key)
                return False
            data[key] = {**entry, **label.to_store_dict()}
            return True

        return await self._file.update(_apply)


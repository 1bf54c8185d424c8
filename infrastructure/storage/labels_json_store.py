from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from infrastructure.storage.json_file import JsonFileStore, JsonMapping
from schemas.session_label import LabelSource, SessionLabel

logger = logging.getLogger(__name__)

LABELS_FILE_NAME = "labels.json"


def labels_path_from_sessions_dir(sessions_dir: Union[str, Path]) -> Path:
    return Path(sessions_dir) / LABELS_FILE_NAME


def parse_label(raw: Any) -> Optional[SessionLabel]:
    if not isinstance(raw, dict):
        return None
    try:
        return SessionLabel.model_validate(raw)
    except ValidationError as exc:
        logger.debug("Skipping malformed label entry: %s", exc)
        return None


def has_label_entry(raw: Any) -> bool:
    """True when a raw stored entry already carries a label, even a partially valid one."""
    if not isinstance(raw, dict):
        return False
    text = raw.get("label")
    if isinstance(text, str) and text:
        return True
    return raw.get("label_source") == LabelSource.MANUAL.value


class LabelsJsonStore:
    """Flat ``{session_key: label}`` file kept next to the session transcripts."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._file = JsonFileStore(path)

    @property
    def path(self) -> Path:
        return self._file.path

    async def read_labels(self) -> Dict[str, SessionLabel]:
        data = await self._file.read()
        labels: Dict[str, SessionLabel] = {}
        for key, raw in data.items():
            label = parse_label(raw)
            if label is not None:
                labels[key] = label
        return labels

    async def get_label(self, key: str) -> Optional[SessionLabel]:
        data = await self._file.read()
        return parse_label(data.get(key))

    async def set_label(
        self,
        key: str,
        label: SessionLabel,
        *,
        replace_existing: bool = True,
    ) -> bool:
        def _apply(data: JsonMapping) -> bool:
            if not replace_existing and has_label_entry(data.get(key)):
                logger.info("Keeping existing label for %s", key)
                return False
            data[key] = label.to_store_dict()
            return True

        return await self._file.update(_apply)

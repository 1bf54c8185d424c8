from __future__ import annotations

from pathlib import Path
from typing import Union

from schemas.labeler_config import PersistenceMode

from .gateway import LabelStore
from .labels_json_store import LabelsJsonStore, labels_path_from_sessions_dir
from .session_json_store import SessionJsonStore, sessions_path_from_sessions_dir


def create_label_store(
    sessions_dir: Union[str, Path],
    mode: Union[PersistenceMode, str] = PersistenceMode.SESSION_JSON,
) -> LabelStore:
    """Instantiate the label sink for the configured persistence mode."""

    if isinstance(mode, PersistenceMode):
        mode_key = mode.value
    else:
        mode_key = str(mode).lower().strip()

    if mode_key == PersistenceMode.LABELS_JSON.value:
        return LabelsJsonStore(labels_path_from_sessions_dir(sessions_dir))

    if mode_key == PersistenceMode.SESSION_JSON.value:
        return SessionJsonStore(sessions_path_from_sessions_dir(sessions_dir))

    raise ValueError(f"Unsupported persistence mode: {mode}")

from __future__ import annotations

from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class PersistenceMode(str, Enum):
    SESSION_JSON = "session_json"
    LABELS_JSON = "labels_json"


_LEGACY_PERSISTENCE_MODES = {"sidecar_labels_json": PersistenceMode.LABELS_JSON}


class SessionLabelerConfig(BaseModel):
    """Runtime options for the session labeling pipeline."""

    model_config = ConfigDict(populate_by_name=True)

    trigger_after_requests: int = Field(3, alias="triggerAfterRequests", ge=1)
    max_messages_for_label: int = Field(5, alias="maxMessagesForLabel", ge=1)
    max_label_chars: int = Field(28, alias="maxLabelChars", ge=1)
    relabel: bool = False
    persistence_mode: PersistenceMode = Field(PersistenceMode.SESSION_JSON, alias="persistenceMode")
    trigger_actions: List[str] = Field(
        default_factory=lambda: ["new", "reset", "stop"],
        alias="triggerActions",
    )


def resolve_config(entry: Optional[Mapping[str, Any]]) -> SessionLabelerConfig:
    """
    Build a config from a host-supplied hook entry.

    Host entries are hand-edited, so values with the wrong type or out of
    range are ignored and the default is kept instead of failing the hook.
    """
    if not entry:
        return SessionLabelerConfig()

    overrides: dict[str, Any] = {}
    for key in ("triggerAfterRequests", "maxMessagesForLabel", "maxLabelChars"):
        value = entry.get(key)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
            overrides[key] = value

    relabel = entry.get("relabel")
    if isinstance(relabel, bool):
        overrides["relabel"] = relabel

    mode = entry.get("persistenceMode")
    if isinstance(mode, str):
        mode_key = mode.strip().lower()
        if mode_key in _LEGACY_PERSISTENCE_MODES:
            overrides["persistenceMode"] = _LEGACY_PERSISTENCE_MODES[mode_key]
        elif mode_key in {m.value for m in PersistenceMode}:
            overrides["persistenceMode"] = PersistenceMode(mode_key)

    actions = entry.get("triggerActions")
    if isinstance(actions, list):
        overrides["triggerActions"] = [
            action.strip() for action in actions if isinstance(action, str) and action.strip()
        ]

    return SessionLabelerConfig.model_validate(overrides)

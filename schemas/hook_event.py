from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

HOOK_ENTRY_NAME = "session-labeler"


class HookContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    session_entry: Optional[Dict[str, Any]] = Field(None, alias="sessionEntry")
    session_id: Optional[str] = Field(None, alias="sessionId")
    session_file: Optional[str] = Field(None, alias="sessionFile")
    workspace_dir: Optional[str] = Field(None, alias="workspaceDir")
    workspace_name: Optional[str] = Field(None, alias="workspaceName")
    cfg: Dict[str, Any] = Field(default_factory=dict)


class HookEvent(BaseModel):
    """Event delivered by the host when a session command fires."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str
    action: str
    session_key: Optional[str] = Field(None, alias="sessionKey")
    context: HookContext = Field(default_factory=HookContext)

    def hook_entry(self) -> Optional[Dict[str, Any]]:
        node: Any = self.context.cfg
        for key in ("hooks", "internal", "entries", HOOK_ENTRY_NAME):
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node if isinstance(node, dict) else None

    def configured_sessions_dir(self) -> Optional[str]:
        node: Any = self.context.cfg
        for key in ("agents", "defaults", "sessionsDir"):
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node if isinstance(node, str) and node else None

    def configured_model(self) -> Optional[str]:
        node: Any = self.context.cfg
        for key in ("agents", "defaults", "model", "primary"):
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node if isinstance(node, str) and node else None

    def session_file(self) -> Optional[str]:
        entry = self.context.session_entry or {}
        value = entry.get("sessionFile") or self.context.session_file
        return value if isinstance(value, str) and value else None

    def session_id(self) -> Optional[str]:
        entry = self.context.session_entry or {}
        value = entry.get("sessionId") or self.context.session_id
        return value if isinstance(value, str) and value else None


class HookResponse(BaseModel):
    status: str
    reason: Optional[str] = None
    label: Optional[str] = None

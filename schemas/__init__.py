from .session_label import LABEL_SCHEMA_VERSION, LabelSource, SessionLabel
from .labeler_config import PersistenceMode, SessionLabelerConfig, resolve_config
from .hook_event import HookContext, HookEvent, HookResponse

__all__ = [
    "LABEL_SCHEMA_VERSION",
    "LabelSource",
    "SessionLabel",
    "PersistenceMode",
    "SessionLabelerConfig",
    "resolve_config",
    "HookContext",
    "HookEvent",
    "HookResponse",
]

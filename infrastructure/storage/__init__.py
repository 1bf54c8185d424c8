from .factory import create_label_store
from .gateway import LabelStore
from .json_file import JsonFileStore
from .labels_json_store import LabelsJsonStore, labels_path_from_sessions_dir
from .session_json_store import SessionJsonStore, sessions_path_from_sessions_dir

__all__ = [
    "JsonFileStore",
    "LabelStore",
    "LabelsJsonStore",
    "SessionJsonStore",
    "create_label_store",
    "labels_path_from_sessions_dir",
    "sessions_path_from_sessions_dir",
]

from .jsonl_transcript import (
    JsonlTranscriptSource,
    TurnSource,
    extract_user_messages,
    parse_transcript,
    resolve_content,
)

__all__ = [
    "JsonlTranscriptSource",
    "TurnSource",
    "extract_user_messages",
    "parse_transcript",
    "resolve_content",
]

from .normalizer import normalize_label
from .length_compressor import ABBREVIATIONS, STOP_WORDS, compress_label
from .fallback_labeler import FALLBACK_LABEL, FILLER_WORDS, fallback_label
from .prompt_builder import LabelPrompt, build_label_prompt, truncate_request
from .label_synthesizer import LabelSynthesizer
from .session_labeler import LabelOutcome, LabelOutcomeStatus, SessionLabeler, SkipReason
from .hook_handler import handle_hook_event, resolve_sessions_dir, resolve_transcript_path

__all__ = [
    "normalize_label",
    "compress_label",
    "ABBREVIATIONS",
    "STOP_WORDS",
    "fallback_label",
    "FALLBACK_LABEL",
    "FILLER_WORDS",
    "LabelPrompt",
    "build_label_prompt",
    "truncate_request",
    "LabelSynthesizer",
    "LabelOutcome",
    "LabelOutcomeStatus",
    "SessionLabeler",
    "SkipReason",
    "handle_hook_event",
    "resolve_sessions_dir",
    "resolve_transcript_path",
]

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional, Union

from infrastructure.ai.candidate_source import CandidateSource
from infrastructure.storage.factory import create_label_store
from infrastructure.transcript.jsonl_transcript import JsonlTranscriptSource
from schemas.hook_event import HookEvent
from schemas.labeler_config import PersistenceMode, SessionLabelerConfig, resolve_config
from services.labeling.label_synthesizer import DEFAULT_CANDIDATE_TIMEOUT_SECONDS, LabelSynthesizer
from services.labeling.session_labeler import LabelOutcome, SessionLabeler, SkipReason

logger = logging.getLogger(__name__)

_AGENT_KEY = re.compile(r"^agent:([^:]+)")


def should_handle(event: HookEvent, config: SessionLabelerConfig) -> bool:
    return event.type == "command" and event.action in config.trigger_actions


def resolve_sessions_dir(event: HookEvent, home_dir: Union[str, Path]) -> Optional[Path]:
    """Locate the directory holding the session's transcript and index files."""
    session_file = event.session_file()
    if session_file:
        return Path(session_file).parent

    configured = event.configured_sessions_dir()
    if configured:
        return Path(configured)

    if event.context.workspace_dir:
        return Path(event.context.workspace_dir) / ".openclaw" / "sessions"

    match = _AGENT_KEY.match(event.session_key or "")
    if match:
        return Path(home_dir) / ".openclaw" / "agents" / match.group(1) / "sessions"

    return None


def resolve_transcript_path(event: HookEvent, sessions_dir: Path) -> Optional[Path]:
    session_file = event.session_file()
    if session_file:
        return Path(session_file)

    session_id = event.session_id()
    if session_id:
        return sessions_dir / f"{session_id}.jsonl"

    return None


async def handle_hook_event(
    event: HookEvent,
    *,
    candidate_source: CandidateSource,
    home_dir: Union[str, Path],
    timeout_seconds: float = DEFAULT_CANDIDATE_TIMEOUT_SECONDS,
) -> Optional[LabelOutcome]:
    """
    Run the labeling pipeline for a host command event.

    Returns ``None`` for events the labeler does not react to. Sessions are
    keyed by the ending session id in ``labels_json`` mode and by the session
    key in ``session_json`` mode.
    """
    config = resolve_config(event.hook_entry())
    if not should_handle(event, config):
        return None

    logger.info("Triggered: %s sessionKey=%s", event.action, event.session_key or "(missing)")

    sessions_dir = resolve_sessions_dir(event, home_dir)
    if sessions_dir is None:
        logger.info("Could not resolve sessions directory, skipping.")
        return LabelOutcome.skipped(SkipReason.NO_TRANSCRIPT)

    transcript_path = resolve_transcript_path(event, sessions_dir)
    transcript = JsonlTranscriptSource(transcript_path) if transcript_path else None
    if transcript is not None and not transcript.exists():
        transcript = None

    if config.persistence_mode == PersistenceMode.LABELS_JSON:
        if transcript_path is None:
            logger.info("No session id for %s, skipping.", event.session_key)
            return LabelOutcome.skipped(SkipReason.NO_TRANSCRIPT)
        store_key = transcript_path.stem
    elif event.session_key:
        store_key = event.session_key
    else:
        logger.info("No session key in event, skipping.")
        return LabelOutcome.skipped(SkipReason.NO_TRANSCRIPT)

    synthesizer = LabelSynthesizer(
        candidate_source,
        max_chars=config.max_label_chars,
        timeout_seconds=timeout_seconds,
    )
    labeler = SessionLabeler(
        synthesizer,
        create_label_store(sessions_dir, config.persistence_mode),
        config,
    )
    return await labeler.label_session(
        store_key,
        transcript,
        workspace_name=event.context.workspace_name,
    )

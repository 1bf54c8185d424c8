from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from infrastructure.storage.gateway import LabelStore
from infrastructure.transcript.jsonl_transcript import TurnSource
from schemas.labeler_config import SessionLabelerConfig
from schemas.session_label import LABEL_SCHEMA_VERSION, LabelSource, SessionLabel
from services.labeling.label_synthesizer import LabelSynthesizer

logger = logging.getLogger(__name__)


class LabelOutcomeStatus(str, Enum):
    LABELED = "labeled"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    ALREADY_LABELED = "already_labeled"
    BELOW_THRESHOLD = "below_threshold"
    NO_TRANSCRIPT = "no_transcript"


@dataclass
class LabelOutcome:
    status: LabelOutcomeStatus
    reason: Optional[SkipReason] = None
    label: Optional[SessionLabel] = None

    @classmethod
    def labeled(cls, label: SessionLabel) -> "LabelOutcome":
        return cls(status=LabelOutcomeStatus.LABELED, label=label)

    @classmethod
    def skipped(cls, reason: SkipReason, label: Optional[SessionLabel] = None) -> "LabelOutcome":
        return cls(status=LabelOutcomeStatus.SKIPPED, reason=reason, label=label)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionLabeler:
    """
    Labels a session once it has enough user turns and records the result.

    Sessions that are not eligible yet (no transcript, too few turns) or that
    already carry a label are skipped. Store errors propagate so the caller
    never believes a label was recorded when it was not.
    """

    def __init__(
        self,
        synthesizer: LabelSynthesizer,
        store: LabelStore,
        config: Optional[SessionLabelerConfig] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._synthesizer = synthesizer
        self._store = store
        self._config = config or SessionLabelerConfig()
        self._clock = clock

    @property
    def config(self) -> SessionLabelerConfig:
        return self._config

    async def label_session(
        self,
        session_key: str,
        turn_source: Optional[TurnSource],
        *,
        workspace_name: Optional[str] = None,
    ) -> LabelOutcome:
        config = self._config

        if not config.relabel:
            existing = await self._store.get_label(session_key)
            if existing is not None:
                logger.info('Session "%s" already labeled: "%s"', session_key, existing.text)
                return LabelOutcome.skipped(SkipReason.ALREADY_LABELED, existing)

        if turn_source is None:
            logger.info("No transcript found for %s, skipping.", session_key)
            return LabelOutcome.skipped(SkipReason.NO_TRANSCRIPT)

        threshold = config.trigger_after_requests
        try:
            turn_count = await turn_source.count_user_turns(limit=threshold)
            if turn_count < threshold:
                logger.info(
                    "Only %s user messages for %s (need %s), skipping.",
                    turn_count,
                    session_key,
                    threshold,
                )
                return LabelOutcome.skipped(SkipReason.BELOW_THRESHOLD)
            requests = await turn_source.read_user_turns(limit=config.max_messages_for_label)
        except OSError as exc:
            logger.info("Transcript for %s unreadable (%s), skipping.", session_key, exc)
            return LabelOutcome.skipped(SkipReason.NO_TRANSCRIPT)

        text = await self._synthesizer.synthesize(
            requests,
            max_chars=config.max_label_chars,
            workspace_name=workspace_name,
        )
        label = SessionLabel(
            text=text,
            source=LabelSource.GENERATED,
            turn_threshold=threshold,
            schema_version=LABEL_SCHEMA_VERSION,
            updated_at=self._clock(),
        )

        written = await self._store.set_label(session_key, label, replace_existing=config.relabel)
        if not written:
            current = await self._store.get_label(session_key)
            return LabelOutcome.skipped(SkipReason.ALREADY_LABELED, current)

        logger.info('Labeled "%s": "%s"', session_key, text)
        return LabelOutcome.labeled(label)

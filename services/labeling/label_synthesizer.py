from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from infrastructure.ai.candidate_source import CandidateSource
from services.labeling.fallback_labeler import fallback_label
from services.labeling.length_compressor import compress_label
from services.labeling.normalizer import normalize_label
from services.labeling.prompt_builder import build_label_prompt

logger = logging.getLogger(__name__)

DEFAULT_MAX_LABEL_CHARS = 28
DEFAULT_CANDIDATE_TIMEOUT_SECONDS = 10.0


class LabelSynthesizer:
    """Turns a session's first user requests into a short label."""

    def __init__(
        self,
        candidate_source: CandidateSource,
        *,
        max_chars: int = DEFAULT_MAX_LABEL_CHARS,
        timeout_seconds: float = DEFAULT_CANDIDATE_TIMEOUT_SECONDS,
    ) -> None:
        self._candidate_source = candidate_source
        self._max_chars = max_chars
        self._timeout_seconds = timeout_seconds

    async def synthesize(
        self,
        requests: Sequence[str],
        *,
        max_chars: Optional[int] = None,
        workspace_name: Optional[str] = None,
    ) -> str:
        budget = max_chars or self._max_chars
        prompt = build_label_prompt(requests, budget, workspace_name=workspace_name)

        raw = await self._request_candidate(prompt.combined())
        if raw is not None:
            label = compress_label(normalize_label(raw), budget)
            if label:
                return label
            logger.info("Model returned no usable label; using keyword fallback.")

        return fallback_label(requests, budget)

    async def _request_candidate(self, prompt: str) -> Optional[str]:
        # Single attempt. Every failure, timeouts included, means "no candidate".
        try:
            return await asyncio.wait_for(
                self._candidate_source.complete(prompt),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("Label model timed out after %.1fs", self._timeout_seconds)
        except Exception as exc:
            logger.warning("Label model call failed: %s", exc)
        return None

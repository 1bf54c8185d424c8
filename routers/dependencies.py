from __future__ import annotations

import hmac
from typing import Callable, Optional

from fastapi import Header, HTTPException, status

from config import settings
from infrastructure.ai.candidate_source import CandidateSource, create_candidate_source


async def require_api_key(x_api_key: Optional[str] = Header(None, alias="X-API-Key")) -> None:
    expected_raw = settings.API_AUTH_TOKEN
    expected = expected_raw.strip().strip('"') if expected_raw else ""
    if not expected:
        # No API key configured; allow all requests.
        return
    provided = x_api_key.strip().strip('"') if x_api_key else ""
    if not provided or not hmac.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )


def get_candidate_source(model_name: Optional[str] = None) -> CandidateSource:
    return create_candidate_source(
        settings.SESSION_LABELER_MODEL or model_name,
        provider=settings.LLM_PROVIDER,
        openai_api_key=settings.OPENAI_API_KEY,
        anthropic_api_key=settings.ANTHROPIC_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        use_dummy=settings.USE_DUMMY_LLM,
    )


def get_home_dir() -> str:
    return settings.SESSION_LABELER_HOME


def get_candidate_source_factory() -> Callable[[Optional[str]], CandidateSource]:
    return get_candidate_source

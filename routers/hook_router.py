import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from config import settings
from infrastructure.ai.candidate_source import CandidateSource
from routers.dependencies import get_candidate_source_factory, get_home_dir
from schemas import HookEvent, HookResponse
from services.labeling import handle_hook_event

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/hooks/session-labeler", response_model=HookResponse)
async def session_labeler_hook(
    event: HookEvent,
    source_factory: Callable[[Optional[str]], CandidateSource] = Depends(get_candidate_source_factory),
    home_dir: str = Depends(get_home_dir),
) -> HookResponse:
    try:
        outcome = await handle_hook_event(
            event,
            candidate_source=source_factory(event.configured_model()),
            home_dir=home_dir,
            timeout_seconds=settings.SESSION_LABELER_TIMEOUT_SECONDS,
        )
    except OSError as exc:
        logger.error("Failed to persist label for %s: %s", event.session_key, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Label could not be stored: {exc}",
        ) from exc

    if outcome is None:
        return HookResponse(status="ignored")
    return HookResponse(
        status=outcome.status.value,
        reason=outcome.reason.value if outcome.reason else None,
        label=outcome.label.text if outcome.label else None,
    )

from __future__ import annotations

import logging
from typing import Optional, Protocol

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable

from infrastructure.ai.model_factory import DEFAULT_LABEL_MODEL, build_chat_model, resolve_provider

logger = logging.getLogger(__name__)


class CandidateSourceUnavailable(RuntimeError):
    """Raised when no text-generation backend is configured."""


class CandidateSource(Protocol):
    """Anything that can turn a prompt into a raw label guess."""

    async def complete(self, prompt: str) -> str:
        ...


class ChatModelCandidateSource:
    """Sends the label prompt to a langchain chat model as a single human message."""

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        *,
        chain: Runnable | None = None,
    ) -> None:
        if chain is None:
            if llm is None:
                raise ValueError("Either an LLM or a prepared chain must be provided.")
            chain = self._build_chain(llm)
        self._chain = chain

    async def complete(self, prompt: str) -> str:
        response = await self._chain.ainvoke({"prompt": prompt})
        if not isinstance(response, str) or not response:
            raise ValueError("LLM response did not include content")
        return response

    def _build_chain(self, llm: BaseChatModel) -> Runnable:
        prompt = ChatPromptTemplate.from_messages([("human", "{prompt}")])
        return prompt | llm | StrOutputParser()


class UnavailableCandidateSource:
    """Stand-in used when no provider is configured; every call fails."""

    def __init__(self, reason: str = "LLM API key not configured") -> None:
        self.reason = reason

    async def complete(self, prompt: str) -> str:
        raise CandidateSourceUnavailable(self.reason)


def create_candidate_source(
    model_name: Optional[str] = None,
    *,
    provider: Optional[str] = None,
    openai_api_key: Optional[str] = None,
    anthropic_api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    use_dummy: bool = False,
) -> CandidateSource:
    """Build a candidate source from explicit settings, degrading to an unavailable source."""
    if use_dummy:
        logger.info("Dummy LLM requested; session labels will use keyword fallback.")
        return UnavailableCandidateSource("Dummy LLM configured")

    model = model_name or DEFAULT_LABEL_MODEL
    resolved = resolve_provider(model, provider, base_url)
    api_key = anthropic_api_key if resolved == "anthropic" else openai_api_key
    try:
        llm = build_chat_model(model, provider=provider, api_key=api_key, base_url=base_url)
    except ValueError as exc:
        logger.warning("Session label model unavailable (%s); using keyword fallback.", exc)
        return UnavailableCandidateSource(str(exc))
    return ChatModelCandidateSource(llm)

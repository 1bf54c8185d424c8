from __future__ import annotations

from typing import Any, Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

DEFAULT_LABEL_MODEL = "gpt-4o-mini"


def resolve_provider(
    model_name: Optional[str],
    fallback_provider: Optional[str] = None,
    base_url: Optional[str] = None,
) -> str:
    """
    Infer provider from model name or fallback provider setting.

    Provider-prefixed ids such as ``anthropic/claude-3-5-sonnet`` and any
    model served from a custom ``base_url`` go through the OpenAI-compatible
    chat completions API with the full id.
    """
    name = (model_name or "").lower()
    if name.startswith("dummy"):
        return "dummy"
    if base_url or "/" in name:
        return "openai"
    if name.startswith("claude") or name.startswith("anthropic"):
        return "anthropic"
    if name.startswith(("gpt", "text-", "o1", "o3", "o4")) or "openai" in name:
        return "openai"

    # Secondary: global fallback when model name doesn't encode provider.
    fallback = (fallback_provider or "").lower()
    if fallback.startswith("dummy"):
        return "dummy"
    if fallback.startswith("anthropic") or fallback.startswith("claude"):
        return "anthropic"
    if fallback.startswith("openai") or fallback.startswith("gpt"):
        return "openai"

    return fallback


def build_chat_model(
    model_name: str,
    *,
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    temperature: float = 0.2,
    max_tokens: int = 40,
    **kwargs: Any,
) -> BaseChatModel:
    """
    Create a chat model instance for the requested provider.

    Retries are disabled: a label request is a single attempt and any
    failure is handled by the caller's fallback path.
    """
    resolved_provider = resolve_provider(model_name, provider, base_url)

    if resolved_provider == "anthropic":
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY is not set.")
        return ChatAnthropic(
            model=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=api_key,
            max_retries=0,
            **kwargs,
        )

    if resolved_provider == "openai":
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not set.")
        if base_url:
            kwargs["base_url"] = base_url.rstrip("/")
        return ChatOpenAI(
            model=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=api_key,
            max_retries=0,
            **kwargs,
        )

    raise ValueError(
        f"Unsupported model name '{model_name}'. "
        "Can only build models for 'anthropic' or 'openai'"
    )

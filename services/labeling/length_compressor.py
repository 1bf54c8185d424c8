from __future__ import annotations

from typing import Dict, FrozenSet, List

STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "a",
        "an",
        "the",
        "and",
        "of",
        "to",
        "for",
        "with",
        "on",
        "in",
        "is",
        "are",
        "was",
        "be",
        "by",
        "at",
        "or",
        "its",
    }
)

# Keys are lowercase; lookups are case-insensitive.
ABBREVIATIONS: Dict[str, str] = {
    "configuration": "Config",
    "documentation": "Docs",
    "performance": "Perf",
    "implementation": "Impl",
    "integration": "Integ",
    "development": "Dev",
    "application": "App",
    "environment": "Env",
    "infrastructure": "Infra",
    "authentication": "Auth",
    "authorization": "Authz",
    "management": "Mgmt",
    "deployment": "Deploy",
    "repository": "Repo",
    "notification": "Notif",
    "woocommerce": "Woo",
    "kubernetes": "K8s",
    "database": "DB",
    "javascript": "JS",
    "typescript": "TS",
    "refactoring": "Refactor",
    "troubleshooting": "Debug",
    "optimization": "Optim",
}

_MAX_RETAINED_WORDS = 4


def compress_label(text: str, max_chars: int) -> str:
    """
    Shrink a label to at most ``max_chars`` characters.

    Labels that already fit are returned untouched. Longer ones go through
    stop-word removal, abbreviation, keeping the longest words in their
    original order, and finally a hard cut, stopping at the first stage
    whose output fits.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be a positive integer")
    if not text:
        return ""
    if len(text) <= max_chars:
        return text

    words = text.split()

    without_stops = [word for word in words if word.lower() not in STOP_WORDS]
    if without_stops:
        words = without_stops
    candidate = " ".join(words)
    if len(candidate) <= max_chars:
        return candidate

    words = [ABBREVIATIONS.get(word.lower(), word) for word in words]
    candidate = " ".join(words)
    if len(candidate) <= max_chars:
        return candidate

    shortened = _keep_informative_words(words, max_chars)
    if shortened:
        return shortened

    return candidate[:max_chars].rstrip()


def _keep_informative_words(words: List[str], max_chars: int) -> str:
    # sorted() is stable, so equal-length words keep their textual order.
    ranked = sorted(enumerate(words), key=lambda item: len(item[1]), reverse=True)
    for keep in range(min(_MAX_RETAINED_WORDS, len(words)), 0, -1):
        selected = sorted(ranked[:keep], key=lambda item: item[0])
        shortened = " ".join(word for _, word in selected)
        if len(shortened) <= max_chars:
            return shortened
    return ""

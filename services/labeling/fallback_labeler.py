from __future__ import annotations

import re
from collections import Counter
from typing import FrozenSet, Sequence

from services.labeling.length_compressor import STOP_WORDS, compress_label

FALLBACK_LABEL = "General"

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")
_MIN_TOKEN_LENGTH = 4
_TOP_WORDS = 3

FILLER_WORDS: FrozenSet[str] = STOP_WORDS | frozenset(
    {
        "about",
        "also",
        "anything",
        "been",
        "being",
        "cant",
        "could",
        "does",
        "doing",
        "dont",
        "from",
        "have",
        "hello",
        "help",
        "here",
        "into",
        "just",
        "know",
        "like",
        "make",
        "more",
        "need",
        "please",
        "really",
        "should",
        "some",
        "something",
        "thank",
        "thanks",
        "that",
        "them",
        "then",
        "there",
        "these",
        "they",
        "thing",
        "think",
        "this",
        "those",
        "want",
        "were",
        "what",
        "when",
        "where",
        "which",
        "will",
        "with",
        "would",
        "your",
    }
)


def fallback_label(source_texts: Sequence[str], max_chars: int) -> str:
    """Derive a label from the most frequent meaningful words when no model output is usable."""
    tokens = (_NON_ALPHANUMERIC.sub("", token) for token in " ".join(source_texts).split())
    counts = Counter(
        token.lower()
        for token in tokens
        if len(token) >= _MIN_TOKEN_LENGTH and token.lower() not in FILLER_WORDS
    )
    if not counts:
        return FALLBACK_LABEL

    # Counter keeps first-seen order, so full ties fall back to textual order.
    ranked = sorted(counts.items(), key=lambda item: (-item[1], -len(item[0])))
    top_words = [word[0].upper() + word[1:] for word, _ in ranked[:_TOP_WORDS]]

    return compress_label(" ".join(top_words), max_chars) or FALLBACK_LABEL

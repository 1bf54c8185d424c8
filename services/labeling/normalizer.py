from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r?\n")
_BULLET_MARKER = re.compile(r"^[-*•]\s+")
_MULTI_SPACE = re.compile(r" {2,}")
_QUOTE_CHARS = ('"', "'", "`")
_EMPHASIS_MARKERS = ("**", "*")
_TRAILING_PUNCTUATION = ".,;:!?"


def normalize_label(raw: str) -> str:
    """
    Clean raw model output into a single-line label candidate.

    Steps run in a fixed order: first non-blank line, trim, drop one leading
    bullet marker, collapse tabs and repeated spaces, strip one layer of
    surrounding quotes and one layer of emphasis markers, drop one trailing
    punctuation character, trim again. An empty result means the candidate
    is unusable.
    """
    if not raw:
        return ""

    label = next((line for line in _LINE_BREAK.split(raw) if line.strip()), "")
    label = label.strip()
    if not label:
        return ""

    label = _BULLET_MARKER.sub("", label, count=1)

    label = label.replace("\t", " ")
    label = _MULTI_SPACE.sub(" ", label)

    label = _strip_symmetric(label, _QUOTE_CHARS).strip()
    label = _strip_symmetric(label, _EMPHASIS_MARKERS).strip()

    if label and label[-1] in _TRAILING_PUNCTUATION:
        label = label[:-1]

    return label.strip()


def _strip_symmetric(label: str, markers: tuple[str, ...]) -> str:
    for marker in markers:
        if (
            len(label) >= 2 * len(marker)
            and label.startswith(marker)
            and label.endswith(marker)
        ):
            return label[len(marker):-len(marker)]
    return label

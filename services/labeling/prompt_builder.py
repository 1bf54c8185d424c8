from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from infrastructure.utils.prompt_loader import load_prompt

SESSION_LABEL_PROMPT = "session_label"
REQUEST_CHAR_LIMIT = 200

_LINE_BREAKS = re.compile(r"[\n\r]+")


@dataclass(frozen=True)
class LabelPrompt:
    system: str
    user: str

    def combined(self) -> str:
        return f"{self.system}\n\n{self.user}"


def build_label_prompt(
    requests: Sequence[str],
    max_chars: int,
    workspace_name: Optional[str] = None,
) -> LabelPrompt:
    """Fill the session label templates; the output depends only on the arguments."""
    templates = load_prompt(SESSION_LABEL_PROMPT)

    workspace_block = f"Workspace: {workspace_name}\n\n" if workspace_name else ""
    request_lines = "\n".join(
        f"{index}) {truncate_request(request)}" for index, request in enumerate(requests, start=1)
    )

    system = templates["system"].format(max_chars=max_chars).strip()
    user = templates["user"].format(
        workspace_block=workspace_block,
        request_lines=request_lines,
    ).strip()
    return LabelPrompt(system=system, user=user)


def truncate_request(request: str, max_len: int = REQUEST_CHAR_LIMIT) -> str:
    one_line = _LINE_BREAKS.sub(" ", request).strip()
    if len(one_line) <= max_len:
        return one_line
    return one_line[: max_len - 3] + "..."

from __future__ import annotations

from typing import Optional, Protocol

from schemas.session_label import SessionLabel


class LabelStore(Protocol):
    """Keyed, durable home for session labels."""

    async def get_label(self, key: str) -> Optional[SessionLabel]:
        """Return the stored label for ``key`` or ``None``."""

    async def set_label(
        self,
        key: str,
        label: SessionLabel,
        *,
        replace_existing: bool = True,
    ) -> bool:
        """
        Store ``label`` under ``key``.

        Returns ``False`` without writing when ``key`` already has a label
        and ``replace_existing`` is false. The check and the write happen
        under the same per-file lock.
        """

from __future__ import annotations

import asyncio
import json
import logging
import os
import weakref
from pathlib import Path
from typing import Any, Callable, Dict, Union
from uuid import uuid4

logger = logging.getLogger(__name__)

JsonMapping = Dict[str, Any]

# One lock per store path and event loop. asyncio.Lock wakes waiters in FIFO
# order, so queued read-modify-write cycles run in arrival order.
_PATH_LOCKS: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[str, asyncio.Lock]]" = (
    weakref.WeakKeyDictionary()
)


def _lock_for(path: Path) -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    locks = _PATH_LOCKS.get(loop)
    if locks is None:
        locks = {}
        _PATH_LOCKS[loop] = locks
    key = str(path.resolve())
    lock = locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        locks[key] = lock
    return lock


class JsonFileStore:
    """
    A JSON object persisted to a single file.

    Writes go to a uniquely named temporary file in the target directory and
    are moved into place with ``os.replace``, so readers only ever see a
    complete document. ``update`` serializes read-modify-write cycles per
    path within this process. Separate processes are not coordinated: two
    processes updating the same file can still lose one another's changes.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def read(self) -> JsonMapping:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_file)

    async def update(self, mutate: Callable[[JsonMapping], bool]) -> bool:
        """
        Apply ``mutate`` to the current mapping and persist it.

        ``mutate`` edits the mapping in place and returns whether anything
        should be written. The whole cycle holds the path lock.
        """
        async with _lock_for(self._path):
            data = await self.read()
            if not mutate(data):
                return False
            await self._write(data)
            return True

    async def _write(self, data: JsonMapping) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_file, data)

    def _read_file(self) -> JsonMapping:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Could not read %s: %s", self._path, exc)
            return {}

        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring unparseable JSON in %s: %s", self._path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object, got %s", self._path, type(data).__name__)
            return {}
        return data

    def _write_file(self, data: JsonMapping) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f"{self._path.name}.{uuid4().hex}.tmp")
        payload = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        try:
            with open(tmp_path, "w", encoding="utf-8") as file:
                file.write(payload)
                file.flush()
                os.fsync(file.fileno())
            os.replace(tmp_path, self._path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %s", self._path)

"""
Key-value persistence for the collection store.

Values are opaque strings (the store writes JSON arrays). A missing key reads
as None. Backends raise StorageError when a write cannot be completed; reads
of a damaged backing file degrade to "no keys" instead of raising.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a storage backend cannot persist a value."""

    pass


class KeyValueStorage(Protocol):
    """Durable string storage keyed by name."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage. Lives only as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStorage:
    """
    Storage backed by a single JSON object file.

    The whole file is rewritten on every `set` via a temporary file and an
    atomic rename, so a crash mid-write never leaves a truncated file behind.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._values = self._read()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read storage file %s, starting empty: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Storage file %s is not a JSON object, starting empty", self.path)
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        values = {**self._values, key: value}
        self._write(values)
        self._values = values

    def _write(self, values: dict[str, str]) -> None:
        """Replace the file with `values`. Touches nothing but the filesystem."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(values, f)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e


class BackgroundJsonFileStorage(JsonFileStorage):
    """
    JsonFileStorage that writes from a worker thread.

    `set` updates the in-memory values immediately and schedules a flush on
    the running event loop, so callers never block on disk. Flushes are
    serialized and always write the latest snapshot; a burst of updates
    costs at most two file writes. Write failures are logged and the
    in-memory values stay authoritative.

    Must be used from code running on an event loop. Call `drain()` before
    shutdown to wait for the last write.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__(path)
        self._lock = asyncio.Lock()
        self._dirty = False
        self._task: asyncio.Task[None] | None = None

    def set(self, key: str, value: str) -> None:
        self._values = {**self._values, key: value}
        self._dirty = True
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._flush())

    async def _flush(self) -> None:
        async with self._lock:
            while self._dirty:
                self._dirty = False
                snapshot = dict(self._values)
                try:
                    await asyncio.to_thread(self._write, snapshot)
                except StorageError:
                    logger.exception("Background write to %s failed", self.path)

    async def drain(self) -> None:
        """Wait until every scheduled write has been attempted."""
        if self._task is not None:
            await self._task

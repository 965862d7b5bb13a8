"""Root store bridging sorted collections to the single JSON database file."""

from __future__ import annotations

import asyncio
import copy
import inspect
import json
import logging
import time
from datetime import UTC, datetime
from typing import Any, Self

from async_jsondb.errors import PersistenceError, SchemaViolationError
from async_jsondb.models import DatabaseConfig, Record, SaveMetrics
from async_jsondb.persistence.base import DatabaseFile

logger = logging.getLogger(__name__)


class RootStore:
    """Owns the root object and writes it back to the database file.

    The root object maps collection names to record arrays. It is parsed once
    from the file when the store is loaded, and every save serializes the
    whole object again; there are no per-collection diffs.

    With ``serialize_saves`` enabled, saves hold a lock for their delay and
    write, so they run one at a time in arrival order and the file always ends
    with the latest state. Without it, saves are not coordinated: each writes
    whatever the root object looks like when it is serialized, and the last
    write to complete wins.

    Example:
        ```python
        store = await RootStore.load(MemoryFile(), DatabaseConfig(file="db.json"))
        users = store.get_or_create_array("users")
        users.append({"id": 1})
        await store.save("users", users)
        ```
    """

    def __init__(
        self,
        file: DatabaseFile,
        data: dict[str, Any],
        config: DatabaseConfig,
    ) -> None:
        """Initialize the root store.

        Prefer ``RootStore.load`` which reads the file first.

        Args:
            file: Adapter used for writes.
            data: The parsed root object.
            config: Connection options.
        """
        self._file = file
        self._data = data
        self._config = config
        self._lock = asyncio.Lock()

        self._saves_completed = 0
        self._saves_failed = 0
        self._pending_saves = 0
        self._last_bytes_written = 0
        self._last_saved_at: float | None = None

    @classmethod
    async def load(cls, file: DatabaseFile, config: DatabaseConfig) -> Self:
        """Read the database file once and build the store.

        A missing file, malformed JSON, or a top-level value that is not an
        object is not an error: a deep copy of ``config.init`` is used instead.

        Args:
            file: Adapter for the database file.
            config: Connection options.

        Returns:
            The loaded store.

        Raises:
            PersistenceError: If the file exists but cannot be read.
        """
        data: Any = None
        try:
            content = file.read()
            if inspect.isawaitable(content):
                content = await content
            data = json.loads(content)
        except FileNotFoundError:
            logger.info("Database file not found, using the initial root object")
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError):
            logger.info("Database file is not valid JSON, using the initial root object")
        except OSError as exc:
            raise PersistenceError(f"Failed to read database file: {exc}") from exc

        if data is not None and not isinstance(data, dict):
            logger.info("Database file does not hold a JSON object, using the initial root object")
            data = None
        if data is None:
            data = copy.deepcopy(config.init)

        store = cls(file, data, config)
        store._log_event("jsondb_loaded", logging.DEBUG, collections=sorted(data))
        return store

    @property
    def data(self) -> dict[str, Any]:
        """The root object. Mutating it bypasses the collections."""
        return self._data

    @property
    def config(self) -> DatabaseConfig:
        """Connection options this store was loaded with."""
        return self._config

    def get_or_create_array(self, name: str) -> list[Record]:
        """Return the array stored under ``name``, creating an empty one if absent.

        Args:
            name: Collection name.

        Returns:
            The backing list itself, not a copy.

        Raises:
            SchemaViolationError: If the value under ``name`` is not an array.
        """
        elements = self._data.get(name)
        if elements is None:
            elements = self._data[name] = []
        if not isinstance(elements, list):
            raise SchemaViolationError(f"Property {name} in the database is not an array.")
        return elements

    def dumps(self) -> str:
        """Serialize the whole root object.

        Returns:
            Two-space indented JSON when ``beautify`` is set, compact otherwise.
        """
        if self._config.beautify:
            return json.dumps(self._data, ensure_ascii=False, indent=2)
        return json.dumps(self._data, ensure_ascii=False, separators=(",", ":"))

    async def save(self, name: str, elements: list[Record]) -> None:
        """Store ``elements`` under ``name`` and write the whole root object.

        Waits the configured delay first. The in-memory root object is not
        restored if the write fails.

        Args:
            name: Collection name.
            elements: Records to store under the name.

        Raises:
            PersistenceError: If serializing or writing the root object fails.
        """
        self._pending_saves += 1
        try:
            if self._config.serialize_saves:
                async with self._lock:
                    await self._save(name, elements)
            else:
                await self._save(name, elements)
        finally:
            self._pending_saves -= 1

        if self._config.on_saved is not None:
            self._config.on_saved()

    async def _save(self, name: str, elements: list[Record]) -> None:
        """Delay, snapshot and write. Called with the lock held when serialized."""
        if self._config.delay > 0:
            await asyncio.sleep(self._config.delay)

        self._data[name] = elements
        try:
            content = self.dumps()
            await self._file.write(content)
        except Exception as exc:
            self._saves_failed += 1
            self._log_event(
                "jsondb_save_failed",
                logging.ERROR,
                collection=name,
                error=f"{type(exc).__name__}: {exc}",
            )
            raise PersistenceError(f"Failed to save database file: {exc}") from exc

        self._saves_completed += 1
        self._last_bytes_written = len(content.encode("utf-8"))
        self._last_saved_at = time.monotonic()
        self._log_event(
            "jsondb_saved",
            logging.DEBUG,
            collection=name,
            records=len(elements),
            bytes=self._last_bytes_written,
        )

    def _log_event(self, event: str, level: int, **fields: Any) -> None:
        """Log a store event as structured JSON."""
        log_entry = {
            "event": event,
            "timestamp": datetime.now(UTC).isoformat(),
            **fields,
        }
        logger.log(level, json.dumps(log_entry))

    def get_metrics(self) -> SaveMetrics:
        """Get current save metrics.

        Returns:
            SaveMetrics: Completed and failed saves, saves in flight, and the
            size and time of the last write.
        """
        return SaveMetrics(
            saves_completed=self._saves_completed,
            saves_failed=self._saves_failed,
            pending_saves=self._pending_saves,
            last_bytes_written=self._last_bytes_written,
            last_saved_at=self._last_saved_at,
        )

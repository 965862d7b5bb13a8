"""Configuration and data models for async-jsondb.

This module defines the option objects accepted by the connection facade and
the metrics reported by the root store.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from async_jsondb.persistence.base import DatabaseFile

Record = dict[str, Any]
Comparator = Callable[[Mapping[str, Any], Mapping[str, Any]], int]
Predicate = Callable[[Mapping[str, Any]], bool]

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Options for connecting to a database file.

    Attributes:
        file: Path of the database file, or an adapter implementing DatabaseFile.
        delay: Seconds to wait before each write (default: 0).
        init: Root object used when the file is absent or unparsable (default: {}).
        beautify: Write JSON indented by two spaces (default: False).
        on_saved: Zero-argument hook called after each successful write.
        serialize_saves: Run saves one at a time in arrival order (default: True).
            When False, concurrent saves race and the last write wins.
    """

    file: str | Path | DatabaseFile
    delay: float = 0.0
    init: dict[str, list[Any]] = field(default_factory=dict)
    beautify: bool = False
    on_saved: Callable[[], None] | None = None
    serialize_saves: bool = True

    def __post_init__(self) -> None:
        if self.delay < 0:
            raise ValueError("delay must be non-negative")
        if not isinstance(self.init, dict):
            raise TypeError("init must be a dict mapping collection names to arrays")

    @classmethod
    def from_options(
        cls,
        file: str | Path | DatabaseFile,
        *,
        delay: float | None = None,
        init: dict[str, list[Any]] | None = None,
        beautify: bool | None = None,
        on_saved: Callable[[], None] | None = None,
        serialize_saves: bool = True,
    ) -> DatabaseConfig:
        """Build a config, filling unset options from the environment.

        Reads ``JSONDB_SAVE_DELAY`` (seconds) and ``JSONDB_BEAUTIFY`` when
        ``delay`` or ``beautify`` are not given.
        """
        return cls(
            file=file,
            delay=delay if delay is not None else float(os.getenv("JSONDB_SAVE_DELAY", "0")),
            init=init if init is not None else {},
            beautify=beautify if beautify is not None else _env_flag("JSONDB_BEAUTIFY"),
            on_saved=on_saved,
            serialize_saves=serialize_saves,
        )


@dataclass(frozen=True, slots=True)
class CollectionOptions:
    """Options for creating a collection.

    Attributes:
        name: Name of the collection in the root object.
        primary_key: Field whose value is unique within the collection.
        comparator: Ordering over records. Compares primary-key values with
            ``<`` and ``>`` when omitted.
    """

    name: str
    primary_key: str
    comparator: Comparator | None = None


@dataclass
class SaveMetrics:
    """Metrics for tracking saves of the root object."""

    saves_completed: int
    saves_failed: int
    pending_saves: int
    last_bytes_written: int
    last_saved_at: float | None = field(default=None)

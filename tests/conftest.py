"""Pytest configuration and fixtures for async-jsondb tests."""

from __future__ import annotations

import asyncio
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from async_jsondb.persistence.memory import MemoryFile


class RecordingSave:
    """Save routine that records a copy of every saved array."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[dict[str, Any]]]] = []

    async def __call__(self, name: str, elements: list[dict[str, Any]]) -> None:
        self.calls.append((name, [dict(el) for el in elements]))


class GatedFile(MemoryFile):
    """Memory file whose writes block until their gate is released."""

    def __init__(self, content: str | None = None) -> None:
        super().__init__(content)
        self.gates: list[asyncio.Event] = []

    async def write(self, content: str) -> None:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        await super().write(content)


class FailingFile(MemoryFile):
    """Memory file whose writes always fail."""

    async def write(self, content: str) -> None:
        raise OSError("disk full")


@pytest.fixture()
def recording_save() -> RecordingSave:
    """Provide a save routine that records every call."""
    return RecordingSave()


@pytest.fixture()
def memory_file() -> MemoryFile:
    """Provide an empty in-memory database file."""
    return MemoryFile()


@pytest.fixture()
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for database files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture()
def db_path(temp_dir: Path) -> Path:
    """Provide a path to a database file that does not exist yet."""
    return temp_dir / "db.json"


@pytest.fixture()
def gated_file() -> GatedFile:
    """Provide a memory file whose writes wait for an explicit release."""
    return GatedFile()


@pytest.fixture()
def failing_file() -> FailingFile:
    """Provide a memory file whose writes raise OSError."""
    return FailingFile()

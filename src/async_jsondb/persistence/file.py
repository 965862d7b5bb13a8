"""JSON database file on disk with atomic async writes."""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiofiles.os

from async_jsondb.persistence.base import DatabaseFile


@dataclass
class JsonFileConfig:
    """Configuration for JsonFile.

    Attributes:
        file_path: Path to the database file.
        encoding: Text encoding used for reads and writes.
        fsync: Whether to fsync the temporary file before replacing the target.
    """

    file_path: Path
    encoding: str = "utf-8"
    fsync: bool = True


class JsonFile(DatabaseFile):
    """Database file stored on the local disk.

    Every write goes to a uniquely named temporary file next to the target,
    which then replaces the target with ``os.replace``. Readers never observe
    a half-written file, and overlapping writes each land whole.

    Example:
        ```python
        file = JsonFile(JsonFileConfig(Path("db.json")))
        await file.write('{"users": []}')
        text = await file.read()
        ```
    """

    def __init__(self, config: JsonFileConfig) -> None:
        """Initialize the file adapter.

        Args:
            config: File configuration.
        """
        self._config = config

    @property
    def path(self) -> Path:
        """Path of the database file."""
        return self._config.file_path

    async def read(self) -> str:
        """Read the whole file.

        Returns:
            The file content.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        async with aiofiles.open(self.path, mode="r", encoding=self._config.encoding) as f:
            return await f.read()

    async def write(self, content: str) -> None:
        """Atomically replace the file content.

        Args:
            content: Text to store.
        """
        path = self.path
        if not await aiofiles.os.path.exists(path.parent):
            await aiofiles.os.makedirs(path.parent, exist_ok=True)

        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(
                tmp_path,
                mode="w",
                encoding=self._config.encoding,
                newline="\n",
            ) as f:
                await f.write(content)
                await f.flush()
                if self._config.fsync:
                    os.fsync(f.fileno())
            await aiofiles.os.replace(tmp_path, path)
        except Exception:
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
            raise


def create_file(path: str | os.PathLike[str]) -> JsonFile:
    """Create a database file adapter for a path on disk.

    Args:
        path: Location of the database file.

    Returns:
        The file adapter.
    """
    return JsonFile(JsonFileConfig(file_path=Path(path)))

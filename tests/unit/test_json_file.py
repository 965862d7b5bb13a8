"""Unit tests for JsonFile."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import aiofiles.os
import pytest

from async_jsondb.persistence.base import DatabaseFile
from async_jsondb.persistence.file import JsonFile, JsonFileConfig, create_file


class TestJsonFile:
    """Test suite for JsonFile class."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, db_path: Path) -> None:
        """Written content is read back unchanged."""
        file = JsonFile(JsonFileConfig(file_path=db_path))
        await file.write('{"users": [{"id": 1, "name": "Zoë"}]}')

        assert await file.read() == '{"users": [{"id": 1, "name": "Zoë"}]}'
        assert db_path.read_text(encoding="utf-8") == '{"users": [{"id": 1, "name": "Zoë"}]}'

    @pytest.mark.asyncio
    async def test_write_replaces_content(self, db_path: Path) -> None:
        """A write replaces the whole file instead of appending."""
        file = create_file(db_path)
        await file.write('{"a": [1, 2, 3]}')
        await file.write("{}")

        assert db_path.read_text() == "{}"

    @pytest.mark.asyncio
    async def test_no_temporary_files_left(self, db_path: Path) -> None:
        """Only the target file remains after writes."""
        file = create_file(db_path)
        for i in range(3):
            await file.write(f'{{"n": [{i}]}}')

        assert [p.name for p in db_path.parent.iterdir()] == ["db.json"]

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, temp_dir: Path) -> None:
        """Missing parent directories are created on write."""
        path = temp_dir / "nested" / "dir" / "db.json"
        file = create_file(path)
        await file.write("{}")

        assert path.read_text() == "{}"

    @pytest.mark.asyncio
    async def test_read_missing_file_raises(self, db_path: Path) -> None:
        """Reading a file that does not exist raises FileNotFoundError."""
        file = create_file(db_path)
        with pytest.raises(FileNotFoundError):
            await file.read()

    @pytest.mark.asyncio
    async def test_write_without_fsync(self, db_path: Path) -> None:
        """fsync can be turned off."""
        file = JsonFile(JsonFileConfig(file_path=db_path, fsync=False))
        await file.write("{}")

        assert db_path.read_text() == "{}"

    def test_create_file_accepts_str(self, db_path: Path) -> None:
        """create_file accepts string paths."""
        file = create_file(str(db_path))
        assert file.path == db_path

    def test_conforms_to_protocol(self, db_path: Path) -> None:
        """JsonFile is a DatabaseFile."""
        assert isinstance(create_file(db_path), DatabaseFile)

    @pytest.mark.asyncio
    async def test_existence_checks_are_awaited(self, db_path: Path) -> None:
        """Filesystem checks during a write go through aiofiles."""
        exists = AsyncMock(wraps=aiofiles.os.path.exists)
        with patch.object(aiofiles.os.path, "exists", exists):
            await create_file(db_path).write("{}")

        exists.assert_awaited_once_with(db_path.parent)
        assert db_path.read_text() == "{}"

    @pytest.mark.asyncio
    async def test_failed_replace_removes_temporary_file(self, db_path: Path) -> None:
        """A failed write leaves neither the target nor a temporary file."""
        with patch.object(aiofiles.os, "replace", AsyncMock(side_effect=OSError("boom"))):
            with pytest.raises(OSError, match="boom"):
                await create_file(db_path).write("{}")

        assert list(db_path.parent.iterdir()) == []

"""Tests for package-level exports."""

from __future__ import annotations


class TestPackageExports:
    """Test cases for top-level package imports."""

    def test_import_connect(self) -> None:
        """connect should be importable from async_jsondb."""
        from async_jsondb import connect

        assert connect is not None

    def test_import_collection(self) -> None:
        """Collection should be importable from async_jsondb."""
        from async_jsondb import Collection

        assert Collection is not None

    def test_import_errors(self) -> None:
        """Error classes should be importable from async_jsondb."""
        from async_jsondb import (
            InvalidArgumentError,
            JsonDBError,
            PersistenceError,
            SchemaViolationError,
        )

        for error in (InvalidArgumentError, PersistenceError, SchemaViolationError):
            assert issubclass(error, JsonDBError)

    def test_import_adapters(self) -> None:
        """Persistence adapters should be importable from async_jsondb."""
        from async_jsondb import JsonFile, MemoryFile, create_file

        assert JsonFile is not None
        assert MemoryFile is not None
        assert create_file is not None

    def test_all_exports_match_declared(self) -> None:
        """All items in __all__ should be importable."""
        import async_jsondb

        for name in async_jsondb.__all__:
            assert hasattr(async_jsondb, name), f"{name} not found in async_jsondb"

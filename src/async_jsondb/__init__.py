"""async-jsondb.

An embedded, file-backed record store: named collections of records kept
sorted by a unique key in memory, with every mutation persisted to a single
JSON file through asyncio.
"""

from async_jsondb.database import Database, connect, connect_with
from async_jsondb.errors import (
    InvalidArgumentError,
    JsonDBError,
    PersistenceError,
    SchemaViolationError,
)
from async_jsondb.models import CollectionOptions, DatabaseConfig, SaveMetrics
from async_jsondb.persistence import DatabaseFile, JsonFile, MemoryFile, create_file
from async_jsondb.store import Collection, RootStore

__version__ = "0.1.0"

__all__ = [
    "Collection",
    "CollectionOptions",
    "Database",
    "DatabaseConfig",
    "DatabaseFile",
    "InvalidArgumentError",
    "JsonDBError",
    "JsonFile",
    "MemoryFile",
    "PersistenceError",
    "RootStore",
    "SaveMetrics",
    "SchemaViolationError",
    "connect",
    "connect_with",
    "create_file",
]

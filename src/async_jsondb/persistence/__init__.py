"""Persistence adapters for the database file."""

from async_jsondb.persistence.base import DatabaseFile
from async_jsondb.persistence.file import JsonFile, JsonFileConfig, create_file
from async_jsondb.persistence.memory import MemoryFile

__all__ = [
    "DatabaseFile",
    "JsonFile",
    "JsonFileConfig",
    "MemoryFile",
    "create_file",
]

"""Connection facade: load a database file and create collections from it."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from async_jsondb.models import CollectionOptions, Comparator, DatabaseConfig
from async_jsondb.persistence.base import DatabaseFile
from async_jsondb.persistence.file import create_file
from async_jsondb.store.collection import Collection
from async_jsondb.store.root import RootStore


class Database:
    """Factory for collections sharing one loaded root store.

    Each call returns a new Collection. Collections created for the same
    name share the backing list and the save routine, so they observe each
    other's mutations.

    Example:
        ```python
        db = await connect("db.json", init={"users": []}, beautify=True)
        users = db(name="users", primary_key="id")
        await users.insert({"id": 1})
        ```
    """

    def __init__(self, store: RootStore) -> None:
        self._store = store

    @property
    def store(self) -> RootStore:
        """The root store backing every collection."""
        return self._store

    @property
    def config(self) -> DatabaseConfig:
        """Connection options."""
        return self._store.config

    def __call__(
        self,
        options: CollectionOptions | None = None,
        /,
        *,
        name: str | None = None,
        primary_key: str | None = None,
        comparator: Comparator | None = None,
    ) -> Collection:
        """Create a collection bound to the named array.

        Accepts either a CollectionOptions instance or the options as
        keyword arguments, not both.

        Collections for the same name share one backing list, which each new
        collection sorts in place with its own comparator. Creating a second
        collection for a name with a different ordering re-sorts the records
        under the first one, whose lookups are then no longer reliable; use
        one ordering per name.

        Raises:
            TypeError: If name or primary_key is missing, or if keyword options
                are given together with a CollectionOptions instance.
            SchemaViolationError: If the root object holds a non-array under
                name, or a stored record lacks the primary key.
        """
        if options is not None:
            if name is not None or primary_key is not None or comparator is not None:
                raise TypeError("pass either CollectionOptions or keyword options, not both")
        else:
            if name is None or primary_key is None:
                raise TypeError("a collection needs both name and primary_key")
            options = CollectionOptions(name=name, primary_key=primary_key, comparator=comparator)

        elements = self._store.get_or_create_array(options.name)
        return Collection(
            name=options.name,
            elements=elements,
            primary_key=options.primary_key,
            save=self._store.save,
            comparator=options.comparator,
        )

    collection = __call__


async def connect(
    file: str | os.PathLike[str] | DatabaseFile,
    *,
    delay: float | None = None,
    init: dict[str, list[Any]] | None = None,
    beautify: bool | None = None,
    on_saved: Callable[[], None] | None = None,
    serialize_saves: bool = True,
) -> Database:
    """Load a database file and return a collection factory.

    Args:
        file: Path of the database file, or an adapter implementing DatabaseFile.
        delay: Seconds to wait before each write. Falls back to
            ``JSONDB_SAVE_DELAY``, then 0.
        init: Root object used when the file is absent or unparsable.
        beautify: Write two-space indented JSON. Falls back to ``JSONDB_BEAUTIFY``.
        on_saved: Zero-argument hook called after each successful write.
        serialize_saves: Run saves one at a time in arrival order. When False,
            concurrent saves race and the last write wins.

    Returns:
        The database factory.

    Raises:
        ValueError: If delay is negative.
        PersistenceError: If the file exists but cannot be read.
    """
    config = DatabaseConfig.from_options(
        file,
        delay=delay,
        init=init,
        beautify=beautify,
        on_saved=on_saved,
        serialize_saves=serialize_saves,
    )
    return await connect_with(config)


async def connect_with(config: DatabaseConfig) -> Database:
    """Load the database described by a DatabaseConfig.

    Args:
        config: Connection options.

    Returns:
        The database factory.
    """
    if isinstance(config.file, (str, Path, os.PathLike)):
        database_file: DatabaseFile = create_file(config.file)
    else:
        database_file = config.file

    store = await RootStore.load(database_file, config)
    return Database(store)

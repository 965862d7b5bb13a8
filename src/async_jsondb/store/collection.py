"""Sorted collection of records kept in order by a unique primary key."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from functools import cmp_to_key
from typing import Any

from async_jsondb.errors import InvalidArgumentError, SchemaViolationError
from async_jsondb.models import Comparator, Predicate, Record

Save = Callable[[str, list[Record]], Awaitable[None]]


class Collection:
    """A named list of records sorted by a comparator over the primary key.

    Lookups use binary search. Every successful insert, update or remove
    awaits a save of the whole database through the shared save routine.
    The backing list is shared with any other collection created for the same
    name on the same connection, so their mutations are visible to each other.

    Iterating with ``for record in collection`` or ``list(collection)`` yields
    the records in ascending order.

    Args:
        name: Name of the collection in the root object.
        elements: Backing list. Sorted in place on construction.
        primary_key: Field whose value is unique within the collection.
        save: Coroutine function called as ``save(name, elements)`` after
            each mutation.
        comparator: Ordering over records. Must return 0 exactly when the
            primary-key values are equal. Defaults to comparing primary-key
            values with ``<`` and ``>``.

    Raises:
        SchemaViolationError: If a stored record is not an object or lacks
            the primary key.

    Example:
        ```python
        users = db(name="users", primary_key="id")
        await users.insert({"id": 2, "name": "bob"})
        await users.update({"id": 2, "name": "robert"})
        users.find({"id": 2})  # {"id": 2, "name": "robert"}
        ```
    """

    def __init__(
        self,
        name: str,
        elements: list[Record],
        primary_key: str,
        save: Save,
        comparator: Comparator | None = None,
    ) -> None:
        self._name = name
        self._primary_key = primary_key
        self._save = save
        self._comparator: Comparator = comparator or self._default_comparator
        self._elements = elements
        for index, el in enumerate(elements):
            if not isinstance(el, Mapping) or primary_key not in el:
                raise SchemaViolationError(
                    f"Record {index} in collection {name!r} has no primary key {primary_key!r}"
                )
        self._elements.sort(key=cmp_to_key(self._comparator))

    def _default_comparator(self, a: Mapping[str, Any], b: Mapping[str, Any]) -> int:
        if a[self._primary_key] < b[self._primary_key]:
            return -1
        if a[self._primary_key] > b[self._primary_key]:
            return 1
        return 0

    @property
    def name(self) -> str:
        """Name of the collection."""
        return self._name

    @property
    def primary_key(self) -> str:
        """Field used as the unique key."""
        return self._primary_key

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Record]:
        yield from self._elements

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, "
            f"primary_key={self._primary_key!r}, size={len(self._elements)})"
        )

    def _require_key(self, record: Mapping[str, Any], action: str) -> None:
        if not isinstance(record, Mapping) or self._primary_key not in record:
            raise InvalidArgumentError(
                f"cannot {action} without the primary key {self._primary_key!r}"
            )

    def locate(self, record: Mapping[str, Any]) -> tuple[int, bool]:
        """Binary search for a record by its primary key.

        Args:
            record: Any mapping holding at least the primary key.

        Returns:
            ``(index, True)`` if a stored record compares equal, otherwise
            ``(insertion_point, False)`` where inserting keeps the order.

        Raises:
            InvalidArgumentError: If the primary key is missing.
        """
        self._require_key(record, "find the index")

        left = 0
        right = len(self._elements) - 1
        while left <= right:
            mid = (left + right) // 2
            cmp = self._comparator(record, self._elements[mid])
            if cmp < 0:
                right = mid - 1
            elif cmp > 0:
                left = mid + 1
            else:
                return mid, True

        return left, False

    async def _start_saving(self) -> None:
        await self._save(self._name, self._elements)

    async def insert(self, record: Record) -> bool:
        """Insert a record unless its primary key already exists.

        Args:
            record: The record to insert. Stored as is, not copied.

        Returns:
            True if inserted, False if the key was taken (nothing changes).

        Raises:
            InvalidArgumentError: If the primary key is missing.
            PersistenceError: If the save fails. The record stays inserted.
        """
        index, found = self.locate(record)
        if found:
            return False

        self._elements.insert(index, record)
        await self._start_saving()
        return True

    async def update(self, record: Mapping[str, Any]) -> bool:
        """Merge fields into the stored record with the same primary key.

        Fields present in ``record`` overwrite the stored ones. The primary
        key itself cannot be changed: a value that compares equal but is not
        equal to the stored one is rejected, so the order never goes stale.

        Args:
            record: Partial record holding the primary key.

        Returns:
            True if a record was updated, False if none has the key.

        Raises:
            InvalidArgumentError: If the primary key is missing or would change.
            PersistenceError: If the save fails. The merge stays applied.
        """
        self._require_key(record, "update an element")
        index, found = self.locate(record)
        if not found:
            return False

        stored = self._elements[index]
        if record[self._primary_key] != stored[self._primary_key]:
            raise InvalidArgumentError(
                f"cannot change the primary key {self._primary_key!r} "
                f"from {stored[self._primary_key]!r} to {record[self._primary_key]!r}"
            )

        stored.update({k: v for k, v in record.items() if k != self._primary_key})
        await self._start_saving()
        return True

    async def remove(self, record: Mapping[str, Any]) -> bool:
        """Remove the record with the same primary key.

        Args:
            record: Partial record holding the primary key.

        Returns:
            True if removed, False if no record has the key.

        Raises:
            InvalidArgumentError: If the primary key is missing.
            PersistenceError: If the save fails. The record stays removed.
        """
        index, found = self.locate(record)
        if not found:
            return False

        # Removing never breaks the order.
        del self._elements[index]
        await self._start_saving()
        return True

    def find(self, record: Mapping[str, Any]) -> Record | None:
        """Get the stored record with the same primary key.

        Args:
            record: Partial record holding the primary key.

        Returns:
            The stored record (not a copy), or None.

        Raises:
            InvalidArgumentError: If the primary key is missing.
        """
        index, found = self.locate(record)
        if not found:
            return None
        return self._elements[index]

    def find_all(self, predicate: Predicate | None = None) -> list[Record]:
        """Get all records, or those matching ``predicate``, in sort order."""
        if predicate is None:
            return list(self._elements)
        return [el for el in self._elements if predicate(el)]

    async def remove_all(self, predicate: Predicate | None = None) -> int:
        """Remove all records, or those matching ``predicate``.

        Each removal goes through ``remove`` and saves on its own.

        Returns:
            Number of removed records.
        """
        removed = 0
        for el in list(self._elements):
            if predicate is None or predicate(el):
                if await self.remove(el):
                    removed += 1
        return removed

    def has(self, criterion: Mapping[str, Any] | Predicate) -> bool:
        """Check whether a record exists.

        Args:
            criterion: A predicate over records, or a partial record holding
                the primary key.
        """
        if callable(criterion):
            return any(criterion(el) for el in self._elements)
        return self.find(criterion) is not None

"""Sorted collections and the root store they persist through."""

from async_jsondb.store.collection import Collection
from async_jsondb.store.root import RootStore

__all__ = [
    "Collection",
    "RootStore",
]

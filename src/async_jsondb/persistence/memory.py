"""In-memory database file, for tests and embedding."""

from __future__ import annotations

from async_jsondb.persistence.base import DatabaseFile


class MemoryFile(DatabaseFile):
    """Database file held in memory.

    Behaves like a file that does not exist until the first write. Every
    written text is kept in ``writes`` in arrival order.

    Example:
        ```python
        file = MemoryFile('{"users": [{"id": 1}]}')
        db = await connect(file)
        ```
    """

    def __init__(self, content: str | None = None) -> None:
        self._content = content
        self.writes: list[str] = []

    @property
    def content(self) -> str | None:
        """Current content, or None if nothing was ever stored."""
        return self._content

    def read(self) -> str:
        if self._content is None:
            raise FileNotFoundError("memory file has no content")
        return self._content

    async def write(self, content: str) -> None:
        self._content = content
        self.writes.append(content)

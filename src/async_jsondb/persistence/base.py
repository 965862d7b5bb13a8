"""Base protocols for persistence layer."""

from collections.abc import Awaitable
from typing import Protocol, runtime_checkable


@runtime_checkable
class DatabaseFile(Protocol):
    """Protocol for the medium holding the database text.

    ``read`` may return the text directly or an awaitable resolving to it.
    """

    def read(self) -> str | Awaitable[str]:
        """Read the whole content."""
        ...

    async def write(self, content: str) -> None:
        """Replace the whole content."""
        ...

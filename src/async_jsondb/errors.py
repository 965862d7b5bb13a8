"""Exception hierarchy for async-jsondb."""


class JsonDBError(Exception):
    """Base class for all errors raised by async-jsondb."""

    pass


class InvalidArgumentError(JsonDBError, TypeError):
    """Raised when a lookup or mutation cannot be performed with the given record.

    Binary search is undefined without the primary key, so find/update/remove
    calls that omit it fail with this error. Updates that would change the
    stored primary key are rejected the same way.
    """

    pass


class SchemaViolationError(JsonDBError, TypeError):
    """Raised when the root object holds a non-array value under a collection name."""

    pass


class PersistenceError(JsonDBError):
    """Raised when reading or writing the database file fails.

    The in-memory mutation that triggered the save has already been applied
    when this is raised; the file may now be behind the in-memory state.
    """

    pass

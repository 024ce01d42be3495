from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Programmer/deployment error: missing env values or misuse of a scope."""


class BackendError(RuntimeError):
    """A read against the backend failed (transport, HTTP status, payload)."""

    def __init__(self, message: str, *, status_code: int | None = None, table: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.table = table


class SingleRowError(BackendError):
    """A single-row query matched zero or more than one row."""

    def __init__(self, table: str, row_count: int):
        super().__init__(
            f"Expected exactly one row from {table}, got {row_count}",
            table=table,
        )
        self.row_count = row_count

"""Persistence layer errors."""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class StoreError(PersistenceError):
    """Key-value store call failed (connection, timeout, bad reply)."""

    pass


class TransactionConflictError(StoreError):
    """Optimistic transaction aborted because a watched key changed.

    Callers may retry the whole operation; the store never does.
    """

    def __init__(self, keys: tuple[str, ...]):
        self.keys = keys
        super().__init__(f"Transaction aborted, watched keys changed: {', '.join(keys)}")

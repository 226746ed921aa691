# ==============================================
# Errors
# ==============================================
#
# - ParseError              → uploaded bytes are not valid JSON
# - StoreError              → a backing store failed (driver error wrapped)
# - StoreNotConnectedError  → store used before connect()
#
# The analyzer and selector never raise for a valid JSON value;
# these only come out of the ingestion and storage layers.
# ==============================================


class ParseError(ValueError):
    """Raised when uploaded content cannot be parsed as JSON."""

    def __init__(self, message: str, filename: str = None):
        super().__init__(message)
        self.filename = filename


class StoreError(RuntimeError):
    """Raised when a relational or document store operation fails."""


class StoreNotConnectedError(StoreError):
    """Raised when a store is used before connect() was called."""

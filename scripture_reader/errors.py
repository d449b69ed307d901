"""Exceptions raised by the scripture reader."""


class ReaderError(Exception):
    """Base class for scripture reader errors."""
    pass


class StoreError(ReaderError):
    """Raised when the durable store cannot be used."""
    pass


class PersistenceReadError(StoreError):
    """Raised when a durable record is unreadable or malformed."""
    pass


class PersistenceWriteError(StoreError):
    """Raised when a durable record cannot be written or removed."""
    pass


class ContentFetchError(ReaderError):
    """Raised when chapter text cannot be retrieved."""
    pass


class NetworkError(ContentFetchError):
    """Raised when the content provider is unreachable or answers with an error."""
    pass


class ParseError(ContentFetchError):
    """Raised when the content provider returns a malformed response."""
    pass


class NoBookSelectedError(ReaderError):
    """Raised when a chapter is selected before any book."""
    pass

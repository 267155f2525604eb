from typing import Optional


class BookSearchError(Exception):
    """Base class for every failure raised while looking up a book."""


class TransportError(BookSearchError):
    """The page (or cover) could not be fetched, or came back non-2xx."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(BookSearchError):
    """The cover image bytes could not be decoded."""


class FormatError(BookSearchError):
    """A date or price field did not match its expected format."""

    def __init__(self, field: str, value: str, reason: str = ""):
        message = f"invalid {field}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.field = field
        self.value = value


class StructureNotFound(BookSearchError):
    """The document ended before the book info panel was fully read."""


class InvalidISBN(BookSearchError, ValueError):
    """The ISBN given to the lookup is empty once spaces and hyphens are dropped."""

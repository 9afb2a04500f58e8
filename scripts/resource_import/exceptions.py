"""Exception types raised while collecting resources."""


class ImporterError(Exception):
    """Base exception for all resource import errors."""

    pass


class PaginationError(ImporterError):
    """Raised when a next-page link does not carry a usable page token."""

    pass


class CollectionError(ImporterError):
    """Raised when listing a resource kind fails; no partial result survives."""

    pass

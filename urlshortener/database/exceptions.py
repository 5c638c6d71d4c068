"""Exceptions raised by mapping store implementations.

These never reach callers of the service; ``URLShortenerService``
translates them into the caller-visible taxonomy in
``urlshortener.exceptions``.

Classes:
    DAOError:
        Generic base class for store exceptions.

    UniqueViolationError:
        Raised when an insert collides with an existing short code.

    MappingNotFoundError:
        Raised when no live mapping exists for a short code.

    DataStoreError:
        Raised on any other store failure (connection loss, bad SQL, etc.).

    ListQueryError / RowScanError / RowIterationError:
        Raised by ``list_page`` to say which phase of a listing failed.
"""


class DAOError(Exception):
    """Generic base class for store exceptions."""

    pass


class UniqueViolationError(DAOError):
    """Exception raised when a short code already exists in the store."""

    pass


class MappingNotFoundError(DAOError):
    """Exception raised when a short code has no live mapping."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, malformed rows, constraint failures other than
    the short code uniqueness, etc.
    """

    pass


class ListQueryError(DataStoreError):
    """The listing query could not be executed."""

    pass


class RowScanError(DataStoreError):
    """A listed row could not be converted into a mapping."""

    pass


class RowIterationError(DataStoreError):
    """Fetching the next batch of listed rows failed."""

    pass

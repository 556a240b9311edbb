"""Exceptions related to Data Access Objects (DAO) operations.

Every DAO exception carries an ErrorKind so callers can branch on the kind of
failure without knowing which backend raised it. The underlying backend error,
if any, is chained as __cause__ (``raise ... from e``).

Classes:
    ErrorKind:
        Enumeration of store error kinds.

    DAOError:
        Generic base class for DAO-related exceptions.

    AliasExistsError:
        Raised when attempting to save a record whose alias already exists.

    AliasNotFoundError:
        Raised when no record with the requested alias exists.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, corruption, etc.).

    InvalidArgumentError:
        Raised when a caller violates an operation's contract (e.g., empty alias).

Example:
    >>> from urlshortener.dao.exceptions import AliasExistsError, ErrorKind
    >>> try:
    ...     raise AliasExistsError("Alias 'abc' already exists.")
    ... except AliasExistsError as e:
    ...     e.kind is ErrorKind.ALIAS_EXISTS
    True
"""

from enum import StrEnum

from urlshortener.exceptions import UrlShortenerError


class ErrorKind(StrEnum):
    """Kinds of failures the URL store can signal."""

    ALIAS_EXISTS = 'alias_exists'
    NOT_FOUND = 'not_found'
    STORE_UNAVAILABLE = 'store_unavailable'
    INVALID_ARGUMENT = 'invalid_argument'


class DAOError(UrlShortenerError):
    """Generic base class for DAO-related exceptions."""

    kind: ErrorKind | None = None
    error_code = 'dao:dao_error'


class AliasExistsError(DAOError):
    """Exception raised when attempting to save a record whose alias already exists in the data store."""

    kind = ErrorKind.ALIAS_EXISTS
    error_code = 'dao:alias_exists_error'


class AliasNotFoundError(DAOError):
    """Exception raised when no record with the requested alias exists in the data store."""

    kind = ErrorKind.NOT_FOUND
    error_code = 'dao:alias_not_found_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, corruption, exhausted alias space etc.
    """

    kind = ErrorKind.STORE_UNAVAILABLE
    error_code = 'dao:data_store_error'


class InvalidArgumentError(DAOError, ValueError):
    """Exception raised when a caller violates an operation's contract (e.g., empty alias)."""

    kind = ErrorKind.INVALID_ARGUMENT
    error_code = 'dao:invalid_argument_error'

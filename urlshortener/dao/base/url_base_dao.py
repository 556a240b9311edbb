"""Abstract base class for URL record data access objects (DAOs).

This class establishes a consistent contract for all URL DAO implementations,
regardless of the underlying storage mechanism (e.g., SQLite, PostgreSQL, Redis).

Responsibilities:
    - Provide an interface for saving, resolving and deleting alias to URL mappings.
    - Standardize error handling across multiple data store implementations.
    - Give every backend a single place to classify raw write failures.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.dao.sql import URLSQLDAO

        >>> dao = URLSQLDAO(sql_url='sqlite:///urls.db')

        >>> dao.save('https://example.com/blog/article-123', 'aBcDeF')
        1

        >>> dao.resolve('aBcDeF')
        'https://example.com/blog/article-123'

        >>> dao.delete('aBcDeF')
        True
        >>> dao.delete('aBcDeF')
        False
"""

from abc import ABC, abstractmethod

from urlshortener.models import URLRecordModel
from urlshortener.dao.exceptions import DAOError, InvalidArgumentError


class URLBaseDAO(ABC):
    """Interface for URL record data access objects (DAOs).

    Methods:
        save(url: str, alias: str) -> int:
            Create a new record and return its id.
            Raises AliasExistsError if the alias already exists.
            Raises DataStoreError on connection or write failure.

        resolve(alias: str) -> str:
            Return the URL stored under an alias.
            Raises AliasNotFoundError if the alias does not exist.
            Raises DataStoreError on connection or read failure.

        get(alias: str) -> URLRecordModel:
            Return the full record stored under an alias.
            Same failure modes as resolve().

        delete(alias: str) -> bool:
            Remove the record stored under an alias, if any.
            Deleting an absent alias is a no-op, not an error.
            Raises DataStoreError on connection or write failure.

        classify_write_error(error: Exception) -> DAOError:
            Turn a raw backend write failure into AliasExistsError or DataStoreError.

    Subclassing:
        Datastore-specific implementations (e.g., URLSQLDAO or URLRedisDAO)
        must extend this class and implement all abstract methods.

    NOTE:
        - Alias uniqueness must be enforced by the data store itself (unique
          constraint, SET NX, ...). Implementations must not check-then-insert.
        - Records are immutable. There is no update operation.
    """

    @abstractmethod
    def save(self, url: str, alias: str) -> int:
        """Create a new record mapping alias to url.

        Args:
            url (str):
                Target URL. Validated by the caller before invocation.

            alias (str):
                Non-empty alias to store the URL under.

        Returns:
            int: id of the new record, greater than every previously issued id.

        Raises:
            InvalidArgumentError:
                If alias or url is empty.

            AliasExistsError:
                If a record with the same alias already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def resolve(self, alias: str) -> str:
        """Look up the URL stored under an alias.

        Args:
            alias (str):
                The alias to look up (exact, case-sensitive match).

        Returns:
            str: The stored URL.

        Raises:
            AliasNotFoundError:
                If no record with the given alias exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, alias: str) -> URLRecordModel:
        """Retrieve the full record stored under an alias.

        Raises:
            AliasNotFoundError:
                If no record with the given alias exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, alias: str) -> bool:
        """Remove the record stored under an alias.

        Deleting an alias that does not exist succeeds as a no-op.

        Args:
            alias (str):
                The alias to delete.

        Returns:
            bool: True if a record was removed, False if the alias was absent.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def classify_write_error(self, error: Exception) -> DAOError:
        """Classify a raw backend write failure.

        Args:
            error (Exception):
                The exception raised by the backend driver during a write.

        Returns:
            DAOError: AliasExistsError for uniqueness violations, DataStoreError otherwise.
                      The returned exception is not raised; callers raise it `from error`.
        """
        pass

    @staticmethod
    def _require_non_empty(**fields: str) -> None:
        empty = [name for name, value in fields.items() if not value]
        if empty:
            raise InvalidArgumentError(f'Expected non-empty value for: {", ".join(empty)}.')

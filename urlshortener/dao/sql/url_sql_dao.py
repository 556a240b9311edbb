"""Data Access Object (DAO) implementation for managing URL records in a relational database

This module provides a SQLAlchemy-based implementation of URLBaseDAO. Any
dialect SQLAlchemy supports works; SQLite is the default.

Responsibilities:
    - Save, resolve and delete alias to URL mappings with one statement each;
    - Delegate alias uniqueness to the table's UNIQUE constraint;
    - Classify driver errors into DAO exceptions.

Classes:
    URLSQLDAO:
        DAO for storing and retrieving URL records in a SQL database.

Example:
    >>> from urlshortener.dao.sql import URLSQLDAO

    >>> dao = URLSQLDAO(sql_url='sqlite:///urls.db', prefix='urlshortener:dev')
    >>> dao.save('https://example.com/page', 'aBcDeF')
    1
    >>> dao.resolve('aBcDeF')
    'https://example.com/page'
    >>> dao.save('https://example.com/other', 'aBcDeF')
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.AliasExistsError: Alias 'aBcDeF' already exists.
"""

from beartype import beartype
from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from urlshortener.models import URLRecordModel
from urlshortener.dao.base import URLBaseDAO
from urlshortener.dao.sql.mixins import SQLEngineMixin
from urlshortener.dao.sql.helpers import handle_sqlalchemy_error, is_unique_violation, database_error_message
from urlshortener.dao.exceptions import DAOError, AliasExistsError, AliasNotFoundError, DataStoreError


class URLSQLDAO(SQLEngineMixin, URLBaseDAO):
    """SQL-based Data Access Object (DAO) for managing URL records

    This class implements the URLBaseDAO interface using a relational table as a data store.

    Attributes (see SQLEngineMixin):
        engine (sqlalchemy.Engine):
            Engine used to communicate with the database.
        table (sqlalchemy.Table):
            URL record table.

    Example:
        >>> dao = URLSQLDAO(sql_url='sqlite:///urls.db')
        >>> dao.save('https://example.com', 'abc123')
        1
        >>> dao.get('abc123')
        URLRecordModel(alias='abc123', url='https://example.com', id=1)
    """

    @beartype
    def save(self, url: str, alias: str) -> int:
        """Insert a new URL record

        A single INSERT; the UNIQUE constraint on alias decides concurrent
        writers of the same alias.

        Args:
            url (str):
                Target URL.
            alias (str):
                Alias to store the URL under.

        Returns:
            int: id of the new record.

        Raises:
            InvalidArgumentError:
                If url or alias is empty.
            AliasExistsError:
                If a record with the same alias already exists.
            DataStoreError:
                If the insert fails for any other reason.
        """
        self._require_non_empty(url=url, alias=alias)

        try:
            with self.engine.begin() as conn:
                result = conn.execute(insert(self.table).values(alias=alias, url=url))
        except SQLAlchemyError as e:
            error = self.classify_write_error(e)
            if isinstance(error, AliasExistsError):
                raise AliasExistsError(f"Alias '{alias}' already exists.") from e
            raise error from e

        return int(result.inserted_primary_key[0])

    @handle_sqlalchemy_error
    @beartype
    def get(self, alias: str) -> URLRecordModel:
        """Retrieve a stored URL record by alias

        Raises:
            AliasNotFoundError:
                If the alias does not exist.
            DataStoreError:
                If the query fails.
        """
        statement = select(self.table.c.id, self.table.c.url).where(self.table.c.alias == alias)
        with self.engine.connect() as conn:
            row = conn.execute(statement).one_or_none()

        if row is None:
            raise AliasNotFoundError(f"Alias '{alias}' not found.")
        return URLRecordModel(alias=alias, url=row.url, id=row.id)

    @handle_sqlalchemy_error
    @beartype
    def resolve(self, alias: str) -> str:
        """Look up the URL stored under an alias

        Raises:
            AliasNotFoundError:
                If the alias does not exist.
            DataStoreError:
                If the query fails.
        """
        statement = select(self.table.c.url).where(self.table.c.alias == alias)
        with self.engine.connect() as conn:
            url = conn.execute(statement).scalar_one_or_none()

        if url is None:
            raise AliasNotFoundError(f"Alias '{alias}' not found.")
        return url

    @handle_sqlalchemy_error
    @beartype
    def delete(self, alias: str) -> bool:
        """Delete the record stored under an alias (no-op when absent)

        Returns:
            bool: True if a record was removed, False otherwise.

        Raises:
            DataStoreError:
                If the delete fails.
        """
        with self.engine.begin() as conn:
            result = conn.execute(delete(self.table).where(self.table.c.alias == alias))
        return result.rowcount > 0

    def classify_write_error(self, error: Exception) -> DAOError:
        """Classify a failed SQL write

        Unique constraint violations become AliasExistsError. Everything else,
        including other integrity errors (e.g. NOT NULL), is a DataStoreError.
        """
        if isinstance(error, IntegrityError) and is_unique_violation(error):
            return AliasExistsError(str(error.orig))
        if isinstance(error, SQLAlchemyError):
            return DataStoreError(database_error_message(self.engine, error))
        return DataStoreError(f'Database write failed: {error}')

import functools
from typing import TypeVar, Any
from collections.abc import Callable

from sqlalchemy import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from urlshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

# Driver error codes reported for unique constraint violations
SQLITE_CONSTRAINT_UNIQUE = 2067
SQLITE_CONSTRAINT_PRIMARYKEY = 1555
POSTGRES_UNIQUE_VIOLATION = '23505'
MYSQL_DUPLICATE_ENTRY = 1062


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell whether an IntegrityError was caused by a unique constraint

    Checks the DB-API driver's error code first (sqlite3, psycopg, psycopg2,
    MySQL drivers) and falls back to the error message.

    Example:
        >>> with engine.begin() as conn:
        ...     conn.execute(insert(urls).values(alias='dup', url='https://example.com'))
        IntegrityError: (sqlite3.IntegrityError) UNIQUE constraint failed: urls.alias
        >>> is_unique_violation(e)
        True
    """
    orig = error.orig
    if getattr(orig, 'sqlite_errorcode', None) in (SQLITE_CONSTRAINT_UNIQUE, SQLITE_CONSTRAINT_PRIMARYKEY):
        return True
    if POSTGRES_UNIQUE_VIOLATION in (getattr(orig, 'sqlstate', None), getattr(orig, 'pgcode', None)):
        return True
    args = getattr(orig, 'args', ())
    if args and args[0] == MYSQL_DUPLICATE_ENTRY:
        return True

    message = str(orig).lower()
    return 'unique constraint' in message or 'duplicate key' in message or 'duplicate entry' in message


def database_error_message(engine: Engine, error: SQLAlchemyError) -> str:
    """Describe a database failure without leaking credentials."""
    location = engine.url.render_as_string(hide_password=True)
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return f'Lost connection to database at {location}.'
    return f'Database operation failed at {location}: {error.__class__.__name__}.'


def handle_sqlalchemy_error[F](method: F) -> F:
    """Wrap SQL-interacting DAO methods to handle database errors

    Args:
        method (Callable[..., Any]):
            DAO method performing SQL statements which may raise sqlalchemy.exc.SQLAlchemyError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any database failure.

    Example:
        >>> @handle_sqlalchemy_error
        ... def count(self):
        ...     with self.engine.connect() as conn:
        ...         return conn.execute(select(func.count()).select_from(self.table)).scalar_one()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            raise DataStoreError(database_error_message(self.engine, e)) from e

    return wrapper

"""SQL mixin providing shared engine initialization, schema creation and connectivity checks.

Responsibilities:
    - Initialize a SQLAlchemy engine (or adopt an injected one)
    - Create the URL schema idempotently
    - Healthcheck the database

Classes:
    - SQLEngineMixin: Base mixin to inject engine setup, table definition & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class URLSQLDAO(SQLEngineMixin, URLBaseDAO):
        ...     pass
        ...
        >>> dao = URLSQLDAO(sql_url='sqlite:///urls.db', prefix='myapp:prod')
        >>> dao.table.name
        'myapp_prod_urls'
"""

from typing import Optional

from sqlalchemy import Engine, MetaData, create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from urlshortener.dao.sql.schema import urls_table
from urlshortener.dao.sql.helpers import database_error_message
from urlshortener.dao.exceptions import DataStoreError


DEFAULT_SQL_URL = 'sqlite:///urlshortener.db'


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute('PRAGMA journal_mode=WAL')
    cursor.close()


def build_engine(sql_url: str, timeout: float = 30.0, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine for the given database URL

    SQLite engines are shared across threads, wait up to `timeout` seconds on
    a locked database and journal in WAL mode so readers don't block writers.
    An in-memory SQLite database lives and dies with its connection, so every
    thread is handed the same single connection.
    """
    url = make_url(sql_url)
    if url.get_backend_name() != 'sqlite':
        return create_engine(sql_url, echo=echo, pool_pre_ping=True, pool_timeout=timeout)

    pool_options = {'poolclass': StaticPool} if url.database in (None, '', ':memory:') else {}
    engine = create_engine(
        sql_url,
        echo=echo,
        connect_args={
            'check_same_thread': False,
            'timeout': timeout,
        },
        pool_pre_ping=True,
        **pool_options,
    )
    event.listen(engine, 'connect', _set_sqlite_pragma)
    return engine


class SQLEngineMixin:
    """Mixin SQLAlchemy engine setup, schema creation and health check for SQL-backed DAOs.

    Attributes:
        engine (sqlalchemy.Engine):
            Engine (connection pool) shared by all operations of the DAO.

        metadata (sqlalchemy.MetaData):
            Metadata holding the URL table definition.

        table (sqlalchemy.Table):
            URL record table, named after the optional prefix.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Run SELECT 1 to verify connectivity.
            Optionally raise a DataStoreError if unreachable.

        _create_schema() -> None:
            Create the URL table and its alias index if they don't exist.
    """

    def __init__(
        self,
        sql_url: Optional[str] = DEFAULT_SQL_URL,
        sql_timeout: Optional[float] = 30.0,
        sql_echo: Optional[bool] = False,
        sql_engine: Optional[Engine] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a SQL-based DAO

        The option is given to either use an existing SQLAlchemy engine or
        create one from a database URL.

        Args:
            sql_url (Optional[str]):
                SQLAlchemy database URL. Defaults to 'sqlite:///urlshortener.db'.

            sql_timeout (Optional[float]):
                Seconds to wait for a locked database (SQLite) or a pooled connection.

            sql_echo (Optional[bool]):
                If True, the engine logs every statement. Defaults to False.

            sql_engine (Optional[sqlalchemy.Engine]):
                Pre-initialized engine. If None, a new engine is created.

            prefix (Optional[str]):
                Namespace prefix for the URL table, e.g. 'app:env'.

        Raises:
            DataStoreError:
                If the healthcheck or the schema creation fails.
        """
        if sql_engine is None:
            sql_engine = build_engine(sql_url, timeout=float(sql_timeout), echo=bool(sql_echo))

        self.engine = sql_engine
        self.metadata = MetaData()
        self.table = urls_table(self.metadata, prefix=prefix)

        self._healthcheck()
        self._create_schema()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Run SELECT 1 to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if the database is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If the database cannot be reached and raise_error=True.
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text('SELECT 1'))
        except SQLAlchemyError as e:
            if raise_error:
                raise DataStoreError(f'{database_error_message(self.engine, e)} Check the provided configuration parameters.') from e
            return False
        else:
            return True

    def _create_schema(self) -> None:
        try:
            self.metadata.create_all(self.engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise DataStoreError(database_error_message(self.engine, e)) from e

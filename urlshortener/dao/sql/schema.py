"""Relational schema for URL records.

Table layout (no prefix):

    CREATE TABLE urls (
        id    INTEGER PRIMARY KEY AUTOINCREMENT,
        alias TEXT NOT NULL UNIQUE,
        url   TEXT NOT NULL
    );
    CREATE INDEX idx_urls_alias ON urls (alias);

AUTOINCREMENT keeps SQLite from recycling the id of a deleted newest row.
Other dialects map the integer primary key to a sequence/identity column,
which never reuses values either.
"""

import re

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text


def table_name(prefix: str | None = None) -> str:
    """Return the URL table name for an optional app prefix.

    Example:
        >>> table_name('urlshortener:dev')
        'urlshortener_dev_urls'
    """
    if prefix is None:
        return 'urls'
    namespace = re.sub(r'\W', '_', prefix)
    return f'{namespace}_urls'


def urls_table(metadata: MetaData, prefix: str | None = None) -> Table:
    name = table_name(prefix)
    return Table(
        name,
        metadata,
        Column('id', Integer, primary_key=True),
        Column('alias', Text, nullable=False, unique=True),
        Column('url', Text, nullable=False),
        Index(f'idx_{name}_alias', 'alias'),
        sqlite_autoincrement=True,
    )

from urlshortener.dao.sql.mixins import SQLEngineMixin
from urlshortener.dao.sql.url_sql_dao import URLSQLDAO


__all__ = [
    'SQLEngineMixin',
    'URLSQLDAO',
]

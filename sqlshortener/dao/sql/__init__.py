from sqlshortener.dao.sql.sql_schema import metadata, url_table
from sqlshortener.dao.sql.short_url_sql_dao import ShortURLSQLDAO
from sqlshortener.dao.sql.mixins import SQLClientMixin


__all__ = [
    'metadata',
    'url_table',
    'ShortURLSQLDAO',
    'SQLClientMixin',
]

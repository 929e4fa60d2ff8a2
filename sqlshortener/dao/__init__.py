from sqlshortener.dao.base import ShortURLBaseDAO
from sqlshortener.dao.sql import ShortURLSQLDAO


__all__ = [
    'ShortURLBaseDAO',
    'ShortURLSQLDAO',
]

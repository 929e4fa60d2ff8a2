import inspect
import functools
from typing import TypeVar, Any
from collections.abc import Callable

from sqlalchemy import exc

from sqlshortener.dao.exceptions import DAOError, DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

# SQLSTATE for unique_violation (PostgreSQL and other ANSI-compliant engines)
UNIQUE_VIOLATION_SQLSTATE = '23505'
SQLITE_UNIQUE_VIOLATION = 'SQLITE_CONSTRAINT_UNIQUE'


def is_unique_violation(error: exc.IntegrityError) -> bool:
    """Check whether an IntegrityError was caused by a UNIQUE constraint

    Supports psycopg (`sqlstate`), psycopg2 (`pgcode`), pg8000 (the `C` field of
    the server response) and sqlite3 (`sqlite_errorname`) driver errors. Any
    other integrity error (NOT NULL, CHECK, FOREIGN KEY) is reported as False,
    and so is every error from drivers of other databases (e.g. MySQL).

    Args:
        error (sqlalchemy.exc.IntegrityError):
            Error raised by SQLAlchemy while executing a statement.

    Returns:
        bool: True if the driver reported a unique constraint violation.

    Example:
        >>> try:
        ...     conn.execute(insert(url_table).values(alias='abc123', url='https://example.com'))
        ... except exc.IntegrityError as e:
        ...     is_unique_violation(e)
        True
    """
    orig = error.orig
    sqlstate = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
    if sqlstate is None and orig.args and isinstance(orig.args[0], dict):
        sqlstate = orig.args[0].get('C')
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    if getattr(orig, 'sqlite_errorname', None) == SQLITE_UNIQUE_VIOLATION:
        return True
    # sqlite3 only exposes the extended error name on Python 3.11+
    return str(orig).startswith('UNIQUE constraint failed')


def handle_database_error[F](method: F) -> F:
    """Wrap SQL-interacting DAO methods to translate database errors

    The wrapped method's qualified name (e.g. 'ShortURLSQLDAO.insert') is used
    as the operation identifier:
        - DAOError subclasses raised by the method get their `op` set (if missing).
        - Any other SQLAlchemy error is re-raised as DataStoreError.

    Args:
        method (Callable[..., Any]):
            DAO method performing SQL operations which may raise sqlalchemy.exc.SQLAlchemyError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on database failures.

    Example:
        >>> @handle_database_error
        ... def get(self, alias):
        ...     with self.engine.begin() as conn:
        ...         return conn.execute(...).scalar_one()
    """
    op = inspect.unwrap(method).__qualname__

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DAOError as e:
            if e.op is None:
                e.op = op
            raise
        except exc.SQLAlchemyError as e:
            raise DataStoreError(f'Database operation failed on {self.engine.url!r}.', op=op) from e

    return wrapper

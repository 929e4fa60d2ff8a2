"""Data Access Object (DAO) implementation for managing shortened URLs in a relational database

This module provides a SQLAlchemy-based implementation of ShortURLBaseDAO for
create, read and delete operations on alias -> URL mappings.

Responsibilities:
    - Insert, retrieve and delete short URLs in the `url` table;
    - Rely on the UNIQUE constraint on `alias` (not a pre-check) to detect duplicates;
    - Run every operation in its own transaction (commit on success, rollback on any error);
    - Translate database errors into DAO exceptions tagged with the failed operation.

Classes:
    ShortURLSQLDAO:
        DAO for storing and retrieving alias -> URL mappings in a SQL datastore.

Example:
    >>> from sqlshortener.dao.sql import ShortURLSQLDAO

    >>> dao = ShortURLSQLDAO(database_url='sqlite:///urls.db')

    >>> dao.insert('https://example.com/page', 'abc123')
    1

    >>> dao.get('abc123')
    'https://example.com/page'

    >>> dao.delete('abc123')
    >>> dao.get('abc123')
    Traceback (most recent call last):
        ...
    sqlshortener.dao.exceptions.ShortURLNotFoundError: ShortURLSQLDAO.get: Short URL with alias 'abc123' not found.
"""

import logging

from beartype import beartype
from sqlalchemy import delete, exc, insert, select

from sqlshortener.dao.base import ShortURLBaseDAO
from sqlshortener.dao.sql.mixins import SQLClientMixin
from sqlshortener.dao.sql.sql_schema import url_table
from sqlshortener.dao.sql.helpers import handle_database_error, is_unique_violation
from sqlshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from sqlshortener.utils.config import database_url


logger = logging.getLogger(__name__)


class ShortURLSQLDAO(SQLClientMixin, ShortURLBaseDAO):
    """SQL-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using SQLAlchemy Core.
    Supported backends are PostgreSQL (psycopg, psycopg2, pg8000) and SQLite.
    Other dialects may run the queries, but their duplicate alias errors are
    reported as DataStoreError rather than ShortURLAlreadyExistsError, and
    MySQL can't index the unbounded `alias` TEXT column at all.

    Attributes (see SQLClientMixin):
        engine (sqlalchemy.engine.Engine):
            SQLAlchemy engine used to communicate with the database.

    Methods:
        insert(url: str, alias: str, **kwargs) -> int:
            Insert an alias -> URL mapping and return the assigned id.
            Raises ShortURLAlreadyExistsError when the alias already exists.
            Raises DataStoreError on any other database failure.

        get(alias: str, **kwargs) -> str:
            Retrieve the URL stored under an alias.
            Raises ShortURLNotFoundError when the alias doesn't exist.
            Raises DataStoreError on any other database failure.

        delete(alias: str, **kwargs) -> None:
            Remove the mapping stored under an alias.
            Raises ShortURLNotFoundError when the alias doesn't exist.
            Raises DataStoreError on any other database failure.

        from_config(component: str = 'url_store', **kwargs) -> ShortURLSQLDAO:
            Build a DAO from the configured database URL.
    """

    @classmethod
    def from_config(cls, component: str = 'url_store', **kwargs) -> 'ShortURLSQLDAO':
        """Build a DAO using the database URL resolved by utils.config.database_url()

        Example:
            >>> os.environ['DATABASE_URL'] = 'sqlite:///urls.db'
            >>> dao = ShortURLSQLDAO.from_config()
        """
        return cls(database_url=database_url(component), **kwargs)

    @handle_database_error
    @beartype
    def insert(self, url: str, alias: str, **kwargs) -> int:
        """Insert an alias -> URL mapping into the `url` table

        The INSERT and the retrieval of the generated id happen in a single
        transaction. `INSERT ... RETURNING id` is used when the dialect supports it,
        otherwise the driver's inserted primary key is read from the same cursor.

        Args:
            url (str):
                The original URL. Must be non-empty.
            alias (str):
                The alias under which the URL is stored. Must be non-empty.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            int: id assigned to the new record

        Raises:
            ValueError:
                If `url` or `alias` is an empty string.
            ShortURLAlreadyExistsError:
                If a mapping with the same alias already exists.
            DataStoreError:
                If any other database error occurs.

        Example:
            >>> dao.insert('https://example.com', 'abc123')
            1
        """
        if not url:
            raise ValueError(f'URL must be a non-empty string (given value: {url!r}).')
        if not alias:
            raise ValueError(f'Alias must be a non-empty string (given value: {alias!r}).')

        statement = insert(url_table).values(alias=alias, url=url)
        try:
            with self.engine.begin() as conn:
                if conn.dialect.insert_returning:
                    record_id = conn.execute(statement.returning(url_table.c.id)).scalar_one()
                else:
                    record_id = conn.execute(statement).inserted_primary_key[0]
        except exc.IntegrityError as e:
            if is_unique_violation(e):
                raise ShortURLAlreadyExistsError(f"Short URL with alias '{alias}' already exists.") from e
            raise DataStoreError(f"Integrity error while inserting alias '{alias}'.") from e

        logger.debug('Inserted short URL.', extra={'alias': alias, 'recordId': record_id})
        return record_id

    @handle_database_error
    @beartype
    def get(self, alias: str, **kwargs) -> str:
        """Retrieve the URL stored under an alias

        Args:
            alias (str):
                The alias identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str: The original URL.

        Raises:
            ShortURLNotFoundError:
                If the alias does not exist.
            DataStoreError:
                If any other database error occurs.

        Example:
            >>> dao.get('abc123')
            'https://example.com'
        """
        statement = select(url_table.c.url).where(url_table.c.alias == alias)
        with self.engine.begin() as conn:
            url = conn.execute(statement).scalar_one_or_none()
            if url is None:
                raise ShortURLNotFoundError(f"Short URL with alias '{alias}' not found.")

        return url

    @handle_database_error
    @beartype
    def delete(self, alias: str, **kwargs) -> None:
        """Remove the mapping stored under an alias

        The affected row count is checked inside the transaction. When no row
        matched, the transaction is rolled back and ShortURLNotFoundError is raised.

        Args:
            alias (str):
                The alias identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Raises:
            ShortURLNotFoundError:
                If the alias does not exist.
            DataStoreError:
                If any other database error occurs.

        Example:
            >>> dao.delete('abc123')
        """
        statement = delete(url_table).where(url_table.c.alias == alias)
        with self.engine.begin() as conn:
            result = conn.execute(statement)
            if result.rowcount == 0:
                raise ShortURLNotFoundError(f"Short URL with alias '{alias}' not found.")

        logger.debug('Deleted short URL.', extra={'alias': alias})

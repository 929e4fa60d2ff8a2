"""Unit tests for the ShortURLSQLDAO

Test coverage includes:

1. Insertion behavior
   - Validates inserting a short URL returns monotonically increasing ids.
   - Ensures ids of deleted records are never reused.
   - Confirms duplicate aliases raise ShortURLAlreadyExistsError and leave the first record intact.
   - Ensures empty strings raise ValueError and invalid types raise Beartype errors.
   - Confirms non-unique integrity errors and database failures raise DataStoreError.
   - Confirms failed transactions are rolled back.

2. Retrieval behavior
   - Ensures fetching a stored alias returns its URL.
   - Confirms missing aliases raise ShortURLNotFoundError.
   - Confirms database failures raise DataStoreError.

3. Deletion behavior
   - Ensures deleting an alias removes the mapping.
   - Confirms missing aliases raise ShortURLNotFoundError and roll back.
   - Confirms database failures raise DataStoreError.

4. End-to-end scenario
   - Save, get, duplicate save, delete, get.

5. Construction from configuration

6. Concurrent access
   - Racing inserts of one alias: exactly one succeeds, the rest raise ShortURLAlreadyExistsError.
   - Racing inserts of distinct aliases all succeed with distinct ids.
"""

import re
import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from sqlalchemy import exc, func, select

from sqlshortener.dao.sql import ShortURLSQLDAO, url_table
from sqlshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from sqlshortener.utils.constants import DATABASE_URL_ENV


def count_rows(dao: ShortURLSQLDAO) -> int:
    with dao.engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(url_table)).scalar_one()


def insert_concurrently(dao: ShortURLSQLDAO, rows: list[tuple[str, str]]) -> tuple[list[int], list[Exception]]:
    """Insert every (url, alias) pair from its own thread, all released at once."""
    barrier = threading.Barrier(len(rows))

    def insert(url, alias):
        barrier.wait(timeout=10)
        return dao.insert(url, alias)

    with ThreadPoolExecutor(max_workers=len(rows)) as pool:
        futures = [pool.submit(insert, url, alias) for url, alias in rows]

    ids = [future.result() for future in futures if future.exception() is None]
    errors = [future.exception() for future in futures if future.exception() is not None]
    return ids, errors


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_short_url(dao):
    """Ensure a valid insert stores the mapping and returns the new id."""
    assert dao.insert('https://example.com', 'abc123') == 1
    assert dao.insert('https://example.com/other', 'xyz789') == 2
    assert count_rows(dao) == 2


def test_insert_does_not_reuse_deleted_ids(dao):
    """Ensure ids are never handed out again once their record is deleted."""
    dao.insert('https://example.com/1', 'first')
    second_id = dao.insert('https://example.com/2', 'second')
    dao.delete('second')

    assert dao.insert('https://example.com/3', 'third') == second_id + 1


def test_insert_short_url_which_already_exists(dao):
    """Ensure duplicate aliases raise ShortURLAlreadyExistsError and keep the first mapping."""
    exception_message = "ShortURLSQLDAO.insert: Short URL with alias 'abc123' already exists."
    dao.insert('https://example.com', 'abc123')

    with pytest.raises(ShortURLAlreadyExistsError, match=re.escape(exception_message)) as exc_info:
        dao.insert('https://other.com', 'abc123')

    assert exc_info.value.op == 'ShortURLSQLDAO.insert'
    assert isinstance(exc_info.value.__cause__, exc.IntegrityError)
    assert dao.get('abc123') == 'https://example.com'
    assert count_rows(dao) == 1


@pytest.mark.parametrize('url, alias', [('', 'abc123'), ('https://example.com', '')])
def test_insert_short_url_with_empty_values(dao, url, alias):
    """Ensure empty URL or alias raise ValueError before touching the database."""
    with pytest.raises(ValueError):
        dao.insert(url, alias)
    assert count_rows(dao) == 0


@pytest.mark.parametrize('url, alias', [(None, 'abc123'), ('https://example.com', 12345), (b'https://example.com', 'abc')])
def test_insert_short_url_with_invalid_type(dao, url, alias):
    """Ensure inserting invalid types raises TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert(url, alias)


def test_insert_short_url_with_other_integrity_error(dao, engine, connection):
    """Ensure integrity errors other than unique violations raise DataStoreError."""
    connection.execute.side_effect = exc.IntegrityError(
        'INSERT INTO url (alias, url) VALUES (?, ?)', ('abc123', None), sqlite3.IntegrityError('NOT NULL constraint failed: url.url')
    )
    dao.engine = engine

    with pytest.raises(DataStoreError, match="ShortURLSQLDAO.insert: Integrity error while inserting alias 'abc123'."):
        dao.insert('https://example.com', 'abc123')


def test_insert_short_url_with_postgres_unique_violation(dao, engine, connection):
    """Ensure SQLSTATE 23505 reported by PostgreSQL drivers raises ShortURLAlreadyExistsError."""

    class UniqueViolation(Exception):
        sqlstate = '23505'

    connection.execute.side_effect = exc.IntegrityError('INSERT INTO url ...', {}, UniqueViolation('duplicate key'))
    dao.engine = engine

    with pytest.raises(ShortURLAlreadyExistsError):
        dao.insert('https://example.com', 'abc123')


def test_insert_short_url_with_database_error(dao, engine, connection):
    """Ensure database failures during insert raise DataStoreError and roll back."""
    connection.execute.side_effect = exc.OperationalError('INSERT INTO url ...', {}, Exception('server closed the connection'))
    dao.engine = engine

    with pytest.raises(DataStoreError, match='ShortURLSQLDAO.insert: Database operation failed') as exc_info:
        dao.insert('https://example.com', 'abc123')

    assert isinstance(exc_info.value.__cause__, exc.OperationalError)
    # engine.begin() context manager saw the exception => transaction rolled back
    exit_args = engine.begin.return_value.__exit__.call_args.args
    assert exit_args[0] is exc.OperationalError


def test_insert_short_url_without_returning_support(dao, engine, connection):
    """Ensure the inserted primary key is used when the dialect lacks INSERT ... RETURNING."""
    connection.dialect.insert_returning = False
    connection.execute.return_value.inserted_primary_key = (42,)
    dao.engine = engine

    assert dao.insert('https://example.com', 'abc123') == 42


# -------------------------------
# 2. Retrieval behavior
# -------------------------------


def test_get_short_url(dao):
    """Ensure a stored alias resolves to its URL."""
    dao.insert('https://example.com/test', 'abc123')
    assert dao.get('abc123') == 'https://example.com/test'


def test_get_short_url_which_does_not_exist(dao):
    """Ensure missing aliases raise ShortURLNotFoundError."""
    with pytest.raises(ShortURLNotFoundError, match="ShortURLSQLDAO.get: Short URL with alias 'abc123' not found.") as exc_info:
        dao.get('abc123')
    assert exc_info.value.op == 'ShortURLSQLDAO.get'


def test_get_short_url_with_invalid_type(dao):
    """Ensure invalid alias types raise TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(12345)


def test_get_short_url_with_database_error(dao, engine):
    """Ensure database failures during get raise DataStoreError."""
    engine.begin.side_effect = exc.OperationalError('BEGIN', {}, Exception('connection refused'))
    dao.engine = engine

    with pytest.raises(DataStoreError, match='ShortURLSQLDAO.get: Database operation failed'):
        dao.get('abc123')


# -------------------------------
# 3. Deletion behavior
# -------------------------------


def test_delete_short_url(dao):
    """Ensure deleting an alias removes the mapping."""
    dao.insert('https://example.com', 'abc123')
    dao.insert('https://example.com', 'keepme')

    assert dao.delete('abc123') is None

    with pytest.raises(ShortURLNotFoundError):
        dao.get('abc123')
    assert dao.get('keepme') == 'https://example.com'


def test_delete_short_url_which_does_not_exist(dao):
    """Ensure deleting a missing alias raises ShortURLNotFoundError."""
    with pytest.raises(ShortURLNotFoundError, match="ShortURLSQLDAO.delete: Short URL with alias 'abc123' not found."):
        dao.delete('abc123')


def test_delete_short_url_twice(dao):
    """Ensure the second delete of the same alias raises ShortURLNotFoundError."""
    dao.insert('https://example.com', 'abc123')
    dao.delete('abc123')

    with pytest.raises(ShortURLNotFoundError):
        dao.delete('abc123')


def test_delete_missing_short_url_rolls_back(dao, engine, connection):
    """Ensure zero affected rows raise ShortURLNotFoundError inside the transaction."""
    connection.execute.return_value.rowcount = 0
    dao.engine = engine

    with pytest.raises(ShortURLNotFoundError):
        dao.delete('abc123')

    exit_args = engine.begin.return_value.__exit__.call_args.args
    assert exit_args[0] is ShortURLNotFoundError


def test_delete_short_url_with_database_error(dao, engine, connection):
    """Ensure database failures during delete raise DataStoreError."""
    connection.execute.side_effect = exc.OperationalError('DELETE FROM url ...', {}, Exception('deadlock detected'))
    dao.engine = engine

    with pytest.raises(DataStoreError, match='ShortURLSQLDAO.delete: Database operation failed'):
        dao.delete('abc123')


# -------------------------------
# 4. End-to-end scenario
# -------------------------------


def test_save_get_duplicate_delete_scenario(dao):
    """Walk through the full lifecycle of a single alias."""
    assert dao.insert('https://example.com', 'abc123') == 1
    assert dao.get('abc123') == 'https://example.com'

    with pytest.raises(ShortURLAlreadyExistsError):
        dao.insert('https://other.com', 'abc123')

    dao.delete('abc123')

    with pytest.raises(ShortURLNotFoundError):
        dao.get('abc123')


# -------------------------------
# 5. Construction from configuration
# -------------------------------


def test_from_config_uses_database_url(monkeypatch, database_url):
    """Ensure from_config() builds a DAO from DATABASE_URL."""
    monkeypatch.setenv(DATABASE_URL_ENV, database_url)

    dao = ShortURLSQLDAO.from_config()

    assert dao.engine.url.database.endswith('urls.db')
    assert dao.insert('https://example.com', 'abc123') == 1
    dao.engine.dispose()


# -------------------------------
# 6. Concurrent access
# -------------------------------


def test_concurrent_inserts_of_same_alias(dao):
    """Ensure racing inserts of one alias leave exactly one winner."""
    rows = [(f'https://example.com/{i}', 'abc123') for i in range(8)]

    ids, errors = insert_concurrently(dao, rows)

    assert len(ids) == 1
    assert len(errors) == 7
    assert all(isinstance(error, ShortURLAlreadyExistsError) for error in errors)
    assert count_rows(dao) == 1
    assert dao.get('abc123') in {url for url, _ in rows}


def test_concurrent_inserts_of_distinct_aliases(dao):
    """Ensure racing inserts of distinct aliases all succeed with distinct ids."""
    rows = [(f'https://example.com/{i}', f'alias{i}') for i in range(8)]

    ids, errors = insert_concurrently(dao, rows)

    assert errors == []
    assert sorted(ids) == list(range(1, 9))
    assert count_rows(dao) == 8
    for url, alias in rows:
        assert dao.get(alias) == url

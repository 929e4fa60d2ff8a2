"""Exceptions related to Data Access Objects (DAO) operations.

Every exception carries the name of the DAO operation that failed in its `op`
attribute (e.g. 'ShortURLSQLDAO.insert'). When set, `op` is rendered as a prefix
of the exception message. The underlying database error is always chained as
`__cause__`.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreConnectionError:
        Raised when the data store can't be reached or the connection URL is unusable.

    SchemaError:
        Raised when provisioning the data store schema fails.

    ShortURLNotFoundError:
        Raised when a short URL alias is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a short URL alias that already exists.

    DataStoreError:
        Raised on any other data store failure (e.g., dropped connection, serialization errors, etc.).

Example:
    >>> from sqlshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with alias 'abc123' not found.", op='ShortURLSQLDAO.get')
    Traceback (most recent call last):
        ...
    sqlshortener.dao.exceptions.ShortURLNotFoundError: ShortURLSQLDAO.get: Short URL with alias 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions.

    Attributes:
        message (str):
            Human readable description of the failure.
        op (str | None):
            Name of the DAO operation which failed.
    """

    def __init__(self, message: str = '', *, op: str | None = None):
        super().__init__(message)
        self.message = message
        self.op = op

    def __str__(self) -> str:
        return f'{self.op}: {self.message}' if self.op else self.message


class DataStoreConnectionError(DAOError):
    """Exception raised when the data store can't be reached."""

    pass


class SchemaError(DAOError):
    """Exception raised when the data store schema can't be provisioned."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a short URL alias is not found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a short URL alias that already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. dropped connections, timeouts, non-unique constraint violations, etc.
    """

    pass

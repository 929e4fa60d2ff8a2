"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying relational engine (e.g., PostgreSQL, SQLite).

Responsibilities:
    - Provide an interface for inserting, retrieving and deleting alias -> URL mappings.
    - Standardize error handling across multiple data store implementations.
    - Enforce a consistent API for callers (HTTP handlers, CLIs, jobs).

Example:
    Typical usage with a datastore-specific implementation:

        >>> from sqlshortener.dao import ShortURLSQLDAO

        >>> dao = ShortURLSQLDAO(database_url='sqlite:///urls.db')

        >>> dao.insert('https://example.com/blog/article-123', 'a1b2c3')
        1

        >>> dao.get('a1b2c3')
        'https://example.com/blog/article-123'

        >>> dao.delete('a1b2c3')
"""

from abc import ABC, abstractmethod


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(url: str, alias: str, **kwargs) -> int:
            Insert a new alias -> URL mapping and return its surrogate id.
            Raises ShortURLAlreadyExistsError if the alias already exists.
            Raises DataStoreError on any other write failure.

        get(alias: str, **kwargs) -> str:
            Retrieve the original URL for an alias.
            Raises ShortURLNotFoundError if the alias does not exist.
            Raises DataStoreError on any other read failure.

        delete(alias: str, **kwargs) -> None:
            Remove the mapping for an alias.
            Raises ShortURLNotFoundError if the alias does not exist.
            Raises DataStoreError on any other write failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLSQLDAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - Mappings are write-once. The DAO does not provide an update operation.
    """

    @abstractmethod
    def insert(self, url: str, alias: str, **kwargs) -> int:
        """Insert a new alias -> URL mapping into the data store.

        Args:
            url (str):
                The original URL to be shortened.

            alias (str):
                The alias under which the URL is stored.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: surrogate id assigned to the new record

        Raises:
            ShortURLAlreadyExistsError:
                If a mapping with the same alias already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, alias: str, **kwargs) -> str:
        """Retrieve the original URL stored under an alias.

        Args:
            alias (str):
                The alias of the mapping to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str: The original URL.

        Raises:
            ShortURLNotFoundError:
                If no mapping with the given alias exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, alias: str, **kwargs) -> None:
        """Remove the mapping stored under an alias.

        Args:
            alias (str):
                The alias of the mapping to be removed.

            **kwargs:
                Additional keyword arguments, used by data store.

        Raises:
            ShortURLNotFoundError:
                If no mapping with the given alias exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

"""Alias generation and shortening utilities

This module provides a helper for generating random, fixed-length aliases and
the create-with-retry flow which stores a URL under a freshly generated alias.

Functions:
    generate_alias(length=DEFAULT_ALIAS_LENGTH, rng=None) -> str:
        Generate a random Base62 alias suitable for use as a URL slug.

    shorten(dao, url, length=DEFAULT_ALIAS_LENGTH, max_attempts=DEFAULT_ALIAS_ATTEMPTS, rng=None) -> URLRecordModel:
        Store a URL under a new alias, retrying on alias collisions.

Example:
    >>> import random
    >>> from sqlshortener.utils import generate_alias
    >>> alias = generate_alias(6, rng=random.Random(42))
    >>> len(alias)
    6
"""

import random
import string
import logging

from sqlshortener.models import URLRecordModel
from sqlshortener.dao.base import ShortURLBaseDAO
from sqlshortener.dao.exceptions import ShortURLAlreadyExistsError
from sqlshortener.utils.constants import DEFAULT_ALIAS_LENGTH, DEFAULT_ALIAS_ATTEMPTS


logger = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_alias(length: int = DEFAULT_ALIAS_LENGTH, rng: random.Random | None = None) -> str:
    """Generate a random alias of exactly `length` characters.

    Each character is drawn independently and uniformly (with replacement) from
    the 62-character alphabet [A-Za-z0-9]. Aliases are not guaranteed to be unique:
    collisions are detected by the data store on insertion.

    Args:
        length (int, optional):
            Number of characters in the alias. Defaults to DEFAULT_ALIAS_LENGTH.

        rng (random.Random, optional):
            Source of randomness. Defaults to the process-wide `random` module.
            Pass a seeded `random.Random` for reproducible aliases.

    Returns:
        str: A random alphanumeric alias.

    Example:
        >>> len(generate_alias(8))
        8
        >>> generate_alias(0)
        ''
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 0:
        raise ValueError(f'Length must be a non-negative integer (given value: {length}).')

    source = rng if rng is not None else random
    return ''.join(source.choices(ALPHABET, k=length))


def shorten(
    dao: ShortURLBaseDAO,
    url: str,
    length: int = DEFAULT_ALIAS_LENGTH,
    max_attempts: int = DEFAULT_ALIAS_ATTEMPTS,
    rng: random.Random | None = None,
) -> URLRecordModel:
    """Store `url` under a newly generated alias.

    A new alias is generated for every attempt. Only alias collisions
    (ShortURLAlreadyExistsError) are retried; any other DAO error propagates
    immediately.

    Args:
        dao (ShortURLBaseDAO):
            Data store used to persist the mapping.

        url (str):
            The original URL.

        length (int, optional):
            Alias length. Defaults to DEFAULT_ALIAS_LENGTH.

        max_attempts (int, optional):
            Maximum number of aliases tried. Defaults to DEFAULT_ALIAS_ATTEMPTS.

        rng (random.Random, optional):
            Source of randomness forwarded to generate_alias().

    Returns:
        URLRecordModel: the persisted record, including its assigned id.

    Raises:
        ValueError:
            If max_attempts is lower than 1.
        ShortURLAlreadyExistsError:
            If every attempted alias collided with an existing one.
        DataStoreError:
            If the data store fails for any other reason.

    Example:
        >>> record = shorten(dao, 'https://example.com/article/123')
        >>> record.alias
        'q7fEmO'
    """
    if max_attempts < 1:
        raise ValueError(f'max_attempts must be at least 1 (given value: {max_attempts}).')

    for attempt in range(1, max_attempts + 1):
        alias = generate_alias(length, rng=rng)
        try:
            record_id = dao.insert(url, alias)
        except ShortURLAlreadyExistsError:
            logger.warning('Alias already taken.', extra={'alias': alias, 'attempt': attempt})
            if attempt == max_attempts:
                raise
        else:
            return URLRecordModel(url=url, alias=alias, id=record_id)

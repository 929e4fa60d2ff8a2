from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class URLRecordModel:
    """Represent a stored alias -> URL mapping.

    Attributes:
        url (str):
            The original long URL that the alias resolves to.
        alias (str):
            The unique short identifier representing the shortened URL.
        id (Optional[int]):
            Surrogate key assigned by the data store on insertion.
            None until the record has been persisted.

    Example:
        >>> record = URLRecordModel(
        ...     url="https://example.com/article/123",
        ...     alias="abc123",
        ...     id=1,
        ... )
        >>> record.url
        'https://example.com/article/123'
        >>> record.alias
        'abc123'
        >>> record.id
        1
    """
    url: str
    alias: str
    id: Optional[int] = None

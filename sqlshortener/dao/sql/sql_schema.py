"""Relational schema backing the SQL DAOs

Tables:
    url:
        id     integer, primary key, auto-increment (never reused)
        alias  text, unique, not null
        url    text, not null

Indexes:
    idx_alias on url(alias)

NOTE: `sqlite_autoincrement` makes SQLite emit AUTOINCREMENT so that ids of
      deleted rows are never handed out again. PostgreSQL SERIAL columns already
      behave this way.
"""

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text


__all__ = ['metadata', 'url_table']


metadata = MetaData()

url_table = Table(
    'url',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('alias', Text, unique=True, nullable=False),
    Column('url', Text, nullable=False),
    Index('idx_alias', 'alias'),
    sqlite_autoincrement=True,
)

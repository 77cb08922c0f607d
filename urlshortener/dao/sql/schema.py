"""SQLAlchemy table definitions for the relational data store.

Uses SQLAlchemy Core (not ORM) so the same queries run on PostgreSQL
in production and SQLite in tests.
"""

import logging

from sqlalchemy import Boolean, Column, Integer, MetaData, Table, Text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, ProgrammingError

from urlshortener.constants import URLS_TABLE


logger = logging.getLogger(__name__)

metadata = MetaData()

urls_table = Table(
    URLS_TABLE,
    metadata,
    Column('short_url', Text, primary_key=True),
    Column('original_url', Text, nullable=False, unique=True),
    Column('user_id', Integer, nullable=False, default=0),
    Column('is_deleted', Boolean, nullable=False, default=False),
)


def create_tables(engine: Engine) -> None:
    """Create the urls table unless it already exists

    create_all() checks for the table before issuing CREATE TABLE. Two
    processes starting together can both pass that check; the loser's
    "already exists" error is treated as success.
    """
    try:
        metadata.create_all(engine, checkfirst=True)
    except (OperationalError, ProgrammingError) as e:
        if 'already exists' not in str(e.orig).lower():
            raise
        logger.debug('Table created concurrently by another process.', extra={'table': URLS_TABLE})

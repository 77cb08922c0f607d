from urlshortener.dao.sql.schema import metadata, urls_table, create_tables
from urlshortener.dao.sql.short_url_sql_dao import ShortURLSQLDAO


__all__ = [
    'metadata',
    'urls_table',
    'create_tables',
    'ShortURLSQLDAO',
]

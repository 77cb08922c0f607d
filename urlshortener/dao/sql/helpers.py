import functools
from typing import TypeVar, Any
from collections.abc import Callable

from sqlalchemy.exc import InterfaceError, OperationalError

from urlshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def normalize_dsn(dsn: str) -> str:
    """Map libpq-style DSNs onto the psycopg SQLAlchemy driver

    Example:
        >>> normalize_dsn('postgres://user:pass@db:5432/urls')
        'postgresql+psycopg://user:pass@db:5432/urls'
        >>> normalize_dsn('sqlite:///urls.db')
        'sqlite:///urls.db'
    """
    for scheme in ('postgres://', 'postgresql://'):
        if dsn.startswith(scheme):
            return 'postgresql+psycopg://' + dsn[len(scheme) :]
    return dsn


def handle_database_error[F](method: F) -> F:
    """Wrap database-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method running SQL which may raise sqlalchemy OperationalError or InterfaceError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with the database.

    Example:
        >>> @handle_database_error
        ... def max_owner_id(self):
        ...     with self.engine.connect() as conn:
        ...         return conn.execute(...).scalar_one()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            location = self.engine.url.render_as_string(hide_password=True)
            raise DataStoreError(f"Can't connect to database at {location}.") from e

    return wrapper

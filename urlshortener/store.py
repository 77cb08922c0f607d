"""Facade over the active short URL data store

Request handlers never talk to a DAO directly. They call get_store(), which
builds the configured backend once per process, recovers it and hands back a
ShortURLStore.

Classes:
    ShortURLStore:
        Owns a ShortURLBaseDAO plus the DeletionPipeline running against it.

Functions:
    get_store() -> ShortURLStore
        Process-wide, recovered store built from environment configuration.

Example:
    >>> store = ShortURLStore(ShortURLMemoryDAO())
    >>> store.insert(ShortURLModel(target='https://example.com', shortcode='100680ad', user_id=1))
    >>> store.delete_many(['100680ad'], user_id=1)
    1
"""

import atexit
import logging
import functools
import threading
from collections.abc import Iterable

from urlshortener.models import ShortURLModel
from urlshortener.constants import Defaults
from urlshortener.deletion import DeletionPipeline
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.dao.logfile import ShortURLLogFileDAO
from urlshortener.dao.sql import ShortURLSQLDAO
from urlshortener.utils.config import AppSettings, load_config


logger = logging.getLogger(__name__)


class ShortURLStore:
    """Single entry point to short URL storage

    Attributes:
        dao (ShortURLBaseDAO):
            Active backend.
        pipeline (DeletionPipeline):
            Batch deleter bound to dao.
        ping_timeout (float):
            Seconds ping() waits for the backend.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        delete_workers: int = Defaults.DELETE_WORKERS,
        ping_timeout: float = Defaults.PING_TIMEOUT,
    ):
        self.dao = dao
        self.pipeline = DeletionPipeline(dao, workers=delete_workers)
        self.ping_timeout = ping_timeout
        self._recover_lock = threading.Lock()
        self._recovered = False

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.dao!r}>'

    @classmethod
    def from_settings(cls, settings: AppSettings) -> 'ShortURLStore':
        """Build a store for the backend settings select

        DATABASE_DSN wins over FILE_STORAGE_PATH; with neither set, records
        live in process memory only.
        """
        if settings.database_dsn:
            dao: ShortURLBaseDAO = ShortURLSQLDAO(
                database_dsn=settings.database_dsn,
                connect_timeout=settings.ping_timeout,
            )
        elif settings.file_storage_path:
            dao = ShortURLLogFileDAO(file_storage_path=settings.file_storage_path)
        else:
            dao = ShortURLMemoryDAO()
        return cls(dao, delete_workers=settings.delete_workers, ping_timeout=settings.ping_timeout)

    def recover(self) -> int:
        """Rebuild backend state from durable storage

        Only the first call does any work; later calls return 0.

        Raises:
            RecoveryLogCorruptError:
                If the backend's recovery log is malformed.
        """
        with self._recover_lock:
            if self._recovered:
                return 0
            restored = self.dao.recover()
            self._recovered = True
        logger.info('Recovered data store.', extra={'backend': repr(self.dao), 'records': restored})
        return restored

    def get(self, shortcode: str) -> ShortURLModel | None:
        return self.dao.get(shortcode)

    def insert(self, short_url: ShortURLModel) -> None:
        self.dao.insert(short_url)

    def delete(self, shortcode: str, user_id: int) -> None:
        self.dao.delete(shortcode, user_id)

    def delete_many(self, shortcodes: Iterable[str], user_id: int) -> int:
        return self.pipeline.delete(shortcodes, user_id)

    def list_by_owner(self, user_id: int) -> list[ShortURLModel]:
        return self.dao.list_by_owner(user_id)

    def max_owner_id(self) -> int:
        return self.dao.max_owner_id()

    def allocate_user_id(self) -> int:
        """Hand out an owner id for a caller without one

        NOTE: two concurrent callers can both receive the same id, since
              nothing reserves it until the first record is written.
        """
        return self.max_owner_id() + 1

    def ping(self, timeout: float | None = None) -> bool:
        return self.dao.ping(self.ping_timeout if timeout is None else timeout)

    def close(self) -> None:
        self.dao.close()


_build_lock = threading.Lock()


def get_store() -> ShortURLStore:
    """Return the process-wide store, building and recovering it on first use

    Concurrent first calls are serialised, so exactly one backend is built
    per process.

    Raises:
        BadConfigurationError:
            If environment configuration is invalid.
        DataStoreError:
            If the relational backend can't be reached within PING_TIMEOUT.
        RecoveryLogCorruptError:
            If the recovery log can't be replayed. Nothing is cached in that case.
    """
    with _build_lock:
        return _build_store()


@functools.cache
def _build_store() -> ShortURLStore:
    settings = load_config()
    store = ShortURLStore.from_settings(settings)
    try:
        store.recover()
    except Exception:
        store.close()
        raise

    atexit.register(store.close)
    logger.info('Store ready.', extra={'backend': settings.backend})
    return store

"""Data Access Object (DAO) implementation backed by an append-only recovery log

Reads are served from a wrapped ShortURLMemoryDAO. Every insert that creates a
new record is journaled to a RecoveryLog before it's acknowledged, so the store
can be rebuilt after a restart via recover().

Classes:
    ShortURLLogFileDAO:
        Crash-recoverable DAO for ShortURLModel.

Example:
    >>> dao = ShortURLLogFileDAO(file_storage_path='/tmp/short-url-db.json')
    >>> dao.recover()
    0
    >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='100680ad', user_id=1))
    <ShortURLLogFileDAO '/tmp/short-url-db.json'>

NOTE:
    - delete() only touches memory; the journal has no tombstones.
"""

import os
import threading

from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.dao.logfile.recovery_log import RecoveryLog
from urlshortener.dao.exceptions import DataStoreError


class ShortURLLogFileDAO(ShortURLBaseDAO):
    """Log-file backed Data Access Object (DAO) for short URL mappings

    Attributes:
        memory (ShortURLMemoryDAO):
            In-memory store answering all reads.
        log (RecoveryLog):
            Journal of every created record.
    """

    def __init__(self, file_storage_path: str | os.PathLike, memory: ShortURLMemoryDAO | None = None):
        self.memory = memory if memory is not None else ShortURLMemoryDAO()
        self.log = RecoveryLog(file_storage_path)
        # Keeps journal order identical to the order records enter memory
        self._write_lock = threading.Lock()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {str(self.log.path)!r}>'

    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLLogFileDAO':
        """Insert a short URL mapping and journal it

        The in-memory write happens first. If the journal append fails the
        record is evicted again, so memory never holds an unjournaled record.

        Raises:
            ShortURLAlreadyExistsError:
                If the shortcode is already bound to a different target URL.
            DataStoreError:
                If the recovery log can't be written.
        """
        with self._write_lock:
            if not self.memory.put_if_absent(short_url):
                return self
            try:
                self.log.append(short_url)
            except DataStoreError:
                self.memory.evict(short_url.shortcode)
                raise
        return self

    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        return self.memory.get(shortcode)

    def delete(self, shortcode: str, user_id: int, **kwargs) -> None:
        self.memory.delete(shortcode, user_id)

    def list_by_owner(self, user_id: int, **kwargs) -> list[ShortURLModel]:
        return self.memory.list_by_owner(user_id)

    def max_owner_id(self, **kwargs) -> int:
        return self.memory.max_owner_id()

    def ping(self, timeout: float = 1.0) -> bool:
        return self.log.healthcheck()

    def recover(self) -> int:
        """Replay the recovery log into memory

        Raises:
            RecoveryLogCorruptError:
                If the journal holds a malformed line.
        """
        with self._write_lock:
            return self.log.replay(self.memory)

"""Append-only recovery log backing the log-file data store

Every newly created short URL is journaled as one JSON object per line:

    {"uuid": 1, "short_url": "6d5f4e3c", "original_url": "https://example.com", "user_id": 1}

Responsibilities:
    - Append records durably (flush + fsync before returning);
    - Replay the journal from the beginning into an in-memory store at startup;
    - Assign an advisory, monotonically increasing sequence number ("uuid").

NOTE:
    - The log does not record tombstones. A short URL deleted before a restart
      is live again after replay.
    - A malformed line aborts the whole replay with RecoveryLogCorruptError,
      rather than silently dropping data.

Classes:
    RecoveryLog:
        Journal file with append() and replay().

Example:
    >>> log = RecoveryLog('/tmp/short-url-db.json')
    >>> log.append(ShortURLModel(target='https://example.com', shortcode='100680ad', user_id=1))
    1
    >>> memory = ShortURLMemoryDAO()
    >>> log.replay(memory)
    1
"""

import os
import json
import logging
import threading
from pathlib import Path
from typing import Any

from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.dao.exceptions import DataStoreError, RecoveryLogCorruptError


logger = logging.getLogger(__name__)


class RecoveryLog:
    """Newline-delimited JSON journal of short URL records

    Attributes:
        path (Path):
            Location of the journal file. Created (with parent directories) if missing.

        sequence (int):
            Sequence number assigned to the last appended or replayed record.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._sequence = 0

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
        except OSError as e:
            raise DataStoreError(f"Can't create recovery log at {self.path}.") from e

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {str(self.path)!r}>'

    @property
    def sequence(self) -> int:
        with self._lock:
            return self._sequence

    @beartype
    def append(self, short_url: ShortURLModel) -> int:
        """Durably append one record to the journal

        Args:
            short_url (ShortURLModel):
                Record to journal. The deleted flag is not persisted.

        Returns:
            int: Sequence number assigned to the record.

        Raises:
            DataStoreError:
                If the journal can't be written.
        """
        with self._lock:
            entry = {
                'uuid': self._sequence + 1,
                'short_url': short_url.shortcode,
                'original_url': short_url.target,
                'user_id': short_url.user_id,
            }
            line = json.dumps(entry, ensure_ascii=False) + '\n'

            try:
                with self.path.open('a', encoding='utf-8') as f:
                    f.write(line)
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                raise DataStoreError(f"Can't append to recovery log at {self.path}.") from e

            self._sequence += 1
            return self._sequence

    @beartype
    def replay(self, sink: ShortURLMemoryDAO) -> int:
        """Rebuild state by restoring every journaled record into sink

        Records are restored in file order, so if a shortcode appears more
        than once the latest entry wins.

        Args:
            sink (ShortURLMemoryDAO):
                Store receiving the records.

        Returns:
            int: Number of records replayed.

        Raises:
            RecoveryLogCorruptError:
                If any line is not a valid record. Nothing after the bad line is replayed.
            DataStoreError:
                If the journal can't be read.
        """
        replayed = 0
        with self._lock:
            try:
                with self.path.open('r', encoding='utf-8') as f:
                    for lineno, line in enumerate(f, start=1):
                        if not line.strip():
                            continue
                        uuid, short_url = self._decode(line, lineno)
                        sink.restore(short_url)
                        self._sequence = max(self._sequence + 1, uuid)
                        replayed += 1
            except OSError as e:
                raise DataStoreError(f"Can't read recovery log at {self.path}.") from e

        logger.info('Replayed recovery log.', extra={'path': str(self.path), 'records': replayed})
        return replayed

    def healthcheck(self) -> bool:
        """Check the journal is still writable

        Raises:
            DataStoreError:
                If the journal file can't be opened for appending.
        """
        try:
            with self.path.open('a', encoding='utf-8'):
                pass
        except OSError as e:
            raise DataStoreError(f"Recovery log at {self.path} isn't writable.") from e
        return True

    def _decode(self, line: str, lineno: int) -> tuple[int, ShortURLModel]:
        try:
            entry: Any = json.loads(line)
        except json.JSONDecodeError as e:
            raise RecoveryLogCorruptError(f'Malformed JSON on line {lineno} of {self.path}.') from e

        if not isinstance(entry, dict):
            raise RecoveryLogCorruptError(f'Expected a JSON object on line {lineno} of {self.path}.')

        shortcode = entry.get('short_url')
        target = entry.get('original_url')
        # 'uuid' is advisory and 'user_id' defaults to an unknown owner
        uuid = entry.get('uuid', 0)
        user_id = entry.get('user_id', 0)

        if not isinstance(shortcode, str) or not shortcode:
            raise RecoveryLogCorruptError(f"Missing or invalid 'short_url' on line {lineno} of {self.path}.")
        if not isinstance(target, str) or not target:
            raise RecoveryLogCorruptError(f"Missing or invalid 'original_url' on line {lineno} of {self.path}.")
        if not _is_natural(uuid):
            raise RecoveryLogCorruptError(f"Invalid 'uuid' on line {lineno} of {self.path}.")
        if not _is_natural(user_id):
            raise RecoveryLogCorruptError(f"Invalid 'user_id' on line {lineno} of {self.path}.")

        return uuid, ShortURLModel(target=target, shortcode=shortcode, user_id=user_id)


def _is_natural(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0

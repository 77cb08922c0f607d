"""Concurrent batch deletion of a user's short URLs

The pipeline is a fan-out/fan-in of threads connected by bounded queues:

    generator --> source queue --> N workers --> merged queue --> caller
                                        \\--> closer (joins workers, ends the stream)

Workers pull from one shared source queue, so a slow worker never holds keys
another one could take. The caller drains the merged queue and applies each
deletion under a pipeline-wide lock. A single threading.Event cancels every
stage: it's polled at each blocking hand-off and set when the caller stops,
either because the stream ended or because a deletion failed.

Classes:
    DeletionPipeline:
        Soft-delete many shortcodes owned by one user, aborting on the first error.

Example:
    >>> pipeline = DeletionPipeline(dao, workers=5)
    >>> pipeline.delete(['100680ad', '6d5f4e3c'], user_id=1)
    2
"""

import queue
import logging
import threading
from collections.abc import Iterable

from urlshortener.constants import Defaults
from urlshortener.dao.base import ShortURLBaseDAO


logger = logging.getLogger(__name__)


# Seconds between checks of the cancellation event while blocked on a queue
POLL_INTERVAL = 0.05

# End-of-stream marker
_DONE = object()


def _put(channel: queue.Queue, item: object, done: threading.Event) -> bool:
    """Put item on channel unless done is set first. Returns whether it was sent."""
    while not done.is_set():
        try:
            channel.put(item, timeout=POLL_INTERVAL)
        except queue.Full:
            continue
        return True
    return False


def _get(channel: queue.Queue, done: threading.Event) -> object:
    """Take the next item from channel, or _DONE once done is set."""
    while not done.is_set():
        try:
            return channel.get(timeout=POLL_INTERVAL)
        except queue.Empty:
            continue
    return _DONE


class DeletionPipeline:
    """Fan-out/fan-in deletion of shortcodes through a DAO

    Attributes:
        dao (ShortURLBaseDAO):
            Store the deletions are applied to.
        workers (int):
            Number of relay threads between the generator and the caller.
    """

    def __init__(self, dao: ShortURLBaseDAO, workers: int = Defaults.DELETE_WORKERS):
        if workers < 1:
            raise ValueError(f'workers must be at least 1 (given value: {workers}).')
        self.dao = dao
        self.workers = workers
        # One deletion in flight at a time, across every call on this pipeline
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} workers={self.workers} dao={self.dao!r}>'

    def delete(self, shortcodes: Iterable[str], user_id: int) -> int:
        """Soft-delete every shortcode on behalf of user_id

        Args:
            shortcodes (Iterable[str]):
                Keys to delete. Duplicates are deleted (idempotently) more than once.
            user_id (int):
                Owner the deletions are checked against.

        Returns:
            int: Number of keys processed.

        Raises:
            ShortURLNotFoundError, ShortURLForbiddenError, DataStoreError:
                The first error raised by the DAO, unchanged. Deletions applied
                before it are not rolled back.
        """
        shortcodes = list(shortcodes)
        if not shortcodes:
            return 0

        done = threading.Event()
        source: queue.Queue = queue.Queue(maxsize=self.workers)
        merged: queue.Queue = queue.Queue(maxsize=self.workers)

        def generate() -> None:
            for shortcode in shortcodes:
                if not _put(source, shortcode, done):
                    return
            for _ in range(self.workers):
                if not _put(source, _DONE, done):
                    return

        def relay() -> None:
            while True:
                shortcode = _get(source, done)
                if shortcode is _DONE or not _put(merged, shortcode, done):
                    return

        workers = [threading.Thread(target=relay, name=f'delete-worker-{i}', daemon=True) for i in range(self.workers)]

        def close() -> None:
            for worker in workers:
                worker.join()
            _put(merged, _DONE, done)

        threads = [threading.Thread(target=generate, name='delete-generator', daemon=True), *workers]
        threads.append(threading.Thread(target=close, name='delete-closer', daemon=True))
        for thread in threads:
            thread.start()

        processed = 0
        try:
            while True:
                shortcode = _get(merged, done)
                if shortcode is _DONE:
                    break
                with self._lock:
                    self.dao.delete(shortcode, user_id)
                processed += 1
        except Exception:
            logger.warning(
                'Batch deletion aborted.',
                extra={'user_id': user_id, 'processed': processed, 'total': len(shortcodes)},
            )
            raise
        finally:
            done.set()
            for thread in threads:
                thread.join()

        logger.debug('Batch deletion finished.', extra={'user_id': user_id, 'processed': processed})
        return processed

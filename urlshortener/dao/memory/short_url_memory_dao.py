"""Data Access Object (DAO) implementation for managing shortened URLs in process memory

Responsibilities:
    - Insert, retrieve and soft-delete short URLs held in a Python dict;
    - Detect shortcodes claimed for two different target URLs;
    - Serialize writers and allow concurrent readers via a ReadWriteLock.

Nothing is persisted: all records are lost when the process exits. The
ShortURLLogFileDAO wraps this class to add durability.

Classes:
    ShortURLMemoryDAO:
        DAO for storing and retrieving ShortURLModel in a dict.

Example:
    >>> from urlshortener.models import ShortURLModel
    >>> from urlshortener.dao.memory import ShortURLMemoryDAO

    >>> dao = ShortURLMemoryDAO()
    >>> dao.insert(ShortURLModel(target="https://example.com/page", shortcode="0a1b2c3d", user_id=3))
    <ShortURLMemoryDAO>
    >>> dao.get("0a1b2c3d").target
    'https://example.com/page'
    >>> dao.max_owner_id()
    3
"""

import dataclasses

from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.memory.locks import ReadWriteLock
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLForbiddenError, ShortURLNotFoundError


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """In-memory Data Access Object (DAO) for short URL mappings

    Attributes:
        urls (dict[str, ShortURLModel]):
            shortcode -> record mapping. Only this class mutates it.

    Methods:
        put_if_absent(short_url: ShortURLModel) -> bool:
            Insert a record and report whether it was newly created.

        restore(short_url: ShortURLModel) -> None:
            Unconditionally store a record (used when replaying a recovery log).

        evict(shortcode: str) -> None:
            Drop a record whose write was never acknowledged to the caller.
    """

    def __init__(self):
        self.urls: dict[str, ShortURLModel] = {}
        self._lock = ReadWriteLock()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}>'

    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLMemoryDAO':
        """Insert a short URL mapping

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLMemoryDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If the shortcode is already bound to a different target URL.
        """
        self.put_if_absent(short_url)
        return self

    @beartype
    def put_if_absent(self, short_url: ShortURLModel) -> bool:
        """Insert a short URL mapping unless an identical one exists

        Returns:
            bool:
                True if the record was created, False if the same shortcode
                already maps to the same target URL.

        Raises:
            ShortURLAlreadyExistsError:
                If the shortcode is already bound to a different target URL.
        """
        with self._lock.write():
            existing = self.urls.get(short_url.shortcode)
            if existing is None:
                self.urls[short_url.shortcode] = short_url
                return True
            if existing.target != short_url.target:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            return False

    @beartype
    def restore(self, short_url: ShortURLModel) -> None:
        """Store a record as-is, overwriting any record with the same shortcode"""
        with self._lock.write():
            self.urls[short_url.shortcode] = short_url

    @beartype
    def evict(self, shortcode: str) -> None:
        """Remove a record which was never acknowledged to a caller

        NOTE: this is not a deletion. Acknowledged records are only ever
              tombstoned via delete().
        """
        with self._lock.write():
            self.urls.pop(shortcode, None)

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        with self._lock.read():
            return self.urls.get(shortcode)

    @beartype
    def delete(self, shortcode: str, user_id: int, **kwargs) -> None:
        """Mark a short URL as deleted if user_id owns it

        Raises:
            ShortURLNotFoundError:
                If the shortcode doesn't exist.
            ShortURLForbiddenError:
                If the record belongs to another user.
        """
        with self._lock.write():
            short_url = self.urls.get(shortcode)
            if short_url is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            if short_url.user_id != user_id:
                raise ShortURLForbiddenError(f"User {user_id} doesn't own short URL with code '{shortcode}'.")
            if not short_url.deleted:
                self.urls[shortcode] = dataclasses.replace(short_url, deleted=True)

    @beartype
    def list_by_owner(self, user_id: int, **kwargs) -> list[ShortURLModel]:
        with self._lock.read():
            return [short_url for short_url in self.urls.values() if short_url.user_id == user_id]

    @beartype
    def max_owner_id(self, **kwargs) -> int:
        with self._lock.read():
            return max((short_url.user_id for short_url in self.urls.values()), default=0)

    def ping(self, timeout: float = 1.0) -> bool:
        return True

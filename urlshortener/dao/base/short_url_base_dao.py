"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (in-memory map, append-only log
file, relational database).

Responsibilities:
    - Provide an interface for inserting, retrieving and soft-deleting ShortURLModel objects.
    - Standardize error handling across multiple data store implementations.
    - Enforce a consistent API for use by the ShortURLStore facade.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.models import ShortURLModel
        >>> from urlshortener.dao.memory import ShortURLMemoryDAO

        >>> dao = ShortURLMemoryDAO()

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3d4",
        ...     user_id=1,
        ... )
        >>> dao.insert(short_url)

        >>> retrieved = dao.get("a1b2c3d4")
        >>> print(retrieved.target)
        https://example.com/blog/article-123

        >>> dao.delete("a1b2c3d4", user_id=1)
        >>> dao.get("a1b2c3d4").deleted
        True
"""

from abc import ABC, abstractmethod

from urlshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel) -> ShortURLBaseDAO:
            Insert a new ShortURLModel into the data store.
            Re-inserting the same shortcode with the same target is a no-op.
            Raises ShortURLAlreadyExistsError if the shortcode is bound to another target.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str) -> ShortURLModel | None:
            Retrieve a ShortURLModel from the data store by shortcode.
            Returns None if not found.
            Raises DataStoreError on connection or read failure.

        delete(shortcode: str, user_id: int) -> None:
            Mark a ShortURLModel as deleted.
            Raises ShortURLNotFoundError if the shortcode doesn't exist.
            Raises ShortURLForbiddenError if the record belongs to another user.

        list_by_owner(user_id: int) -> list[ShortURLModel]:
            Return every record (deleted or not) owned by a user, in no particular order.

        max_owner_id() -> int:
            Return the highest owner id present, 0 for an empty store.

        ping(timeout: float) -> bool:
            Healthcheck the data store. Raises DataStoreError if it's unreachable.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLMemoryDAO or
        ShortURLSQLDAO) must extend this class and implement all
        abstract methods. recover() and close() are optional hooks.

    NOTE:
        - Records are never physically removed. Deletion only sets the
          `deleted` tombstone, so a shortcode stays bound to its target
          for the lifetime of the store.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If the shortcode is already bound to a different target URL.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel | None: The ShortURLModel instance if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str, user_id: int, **kwargs) -> None:
        """Soft-delete a ShortURLModel owned by user_id.

        Deleting a record which is already deleted is a no-op.

        Args:
            shortcode (str):
                The shortcode of the ShortURLModel to be deleted.

            user_id (int):
                The id of the user requesting the deletion.

            **kwargs:
                Additional keyword arguments, used by data store.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            ShortURLForbiddenError:
                If the ShortURLModel is owned by another user.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def list_by_owner(self, user_id: int, **kwargs) -> list[ShortURLModel]:
        """Retrieve all ShortURLModels owned by a user (deleted ones included).

        Args:
            user_id (int):
                The owner's id.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            list[ShortURLModel]: The user's records, order unspecified.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def max_owner_id(self, **kwargs) -> int:
        """Retrieve the highest owner id in the data store.

        Returns:
            int: The highest user_id of any record, or 0 if the store is empty.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def ping(self, timeout: float = 1.0) -> bool:
        """Healthcheck the data store.

        Args:
            timeout (float):
                Seconds to wait for the data store before giving up.

        Returns:
            bool: True if the data store is reachable.

        Raises:
            DataStoreError:
                If the data store is unreachable or doesn't answer within timeout.
        """
        pass

    def recover(self) -> int:
        """Rebuild state from durable storage at startup.

        Returns:
            int: Number of records restored. Backends without a journal restore nothing.
        """
        return 0

    def close(self) -> None:
        """Release data store resources."""
        return None

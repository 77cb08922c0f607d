"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when a shortcode is already bound to a different target URL.

    ShortURLForbiddenError:
        Raised when a user tries to delete a ShortURLModel they don't own.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, I/O errors, etc.).

    RecoveryLogCorruptError:
        Raised when the recovery log contains a record that cannot be decoded.

Example:
    >>> from urlshortener.dao.exceptions import ShortURLForbiddenError
    >>> raise ShortURLForbiddenError("User 2 doesn't own short URL 'a1b2c3d4'.")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.ShortURLForbiddenError: User 2 doesn't own short URL 'a1b2c3d4'.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when a shortcode is already bound to a different target URL in the data store."""

    pass


class ShortURLForbiddenError(DAOError):
    """Exception raised when a user attempts to modify a ShortURLModel owned by another user."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, unwritable files, etc.
    """

    pass


class RecoveryLogCorruptError(DAOError):
    """Exception raised when a recovery log line is malformed.

    Replay stops at the first bad line; the store must not serve traffic
    with a partially recovered state.
    """

    pass

"""Utility functions for application configuration management.

Configuration comes from environment variables (set on the Lambda function
or exported locally). Storage backend selection:

    DATABASE_DSN       non-empty  -> relational backend (PostgreSQL via SQLAlchemy)
    FILE_STORAGE_PATH  non-empty  -> append-only log-file backend
    neither                       -> volatile in-memory backend

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    load_config() -> AppSettings
        Read and validate all settings.

Example:
    >>> os.environ['FILE_STORAGE_PATH'] = '/tmp/short-url-db.json'
    >>> settings = load_config()
    >>> settings.backend
    'logfile'
"""

import os
import logging
from dataclasses import dataclass

from urlshortener.constants import ENV, Defaults
from urlshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSettings:
    database_dsn: str = ''
    file_storage_path: str = ''
    delete_workers: int = Defaults.DELETE_WORKERS
    ping_timeout: float = Defaults.PING_TIMEOUT

    @property
    def backend(self) -> str:
        if self.database_dsn:
            return 'sql'
        if self.file_storage_path:
            return 'logfile'
        return 'memory'


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def load_config() -> AppSettings:
    """Load application settings from environment variables

    Returns:
        AppSettings: validated settings.

    Raises:
        BadConfigurationError:
            If DELETE_WORKERS isn't a positive integer or PING_TIMEOUT isn't a positive number.
    """
    delete_workers_str = os.environ.get(ENV.Pipeline.DELETE_WORKERS, '').strip()
    ping_timeout_str = os.environ.get(ENV.Storage.PING_TIMEOUT, '').strip()

    try:
        delete_workers = int(delete_workers_str) if delete_workers_str else Defaults.DELETE_WORKERS
    except ValueError as e:
        raise BadConfigurationError(f'Invalid {ENV.Pipeline.DELETE_WORKERS} value: {delete_workers_str!r}') from e
    if delete_workers < 1:
        raise BadConfigurationError(f'{ENV.Pipeline.DELETE_WORKERS} must be at least 1 (given value: {delete_workers}).')

    try:
        ping_timeout = float(ping_timeout_str) if ping_timeout_str else Defaults.PING_TIMEOUT
    except ValueError as e:
        raise BadConfigurationError(f'Invalid {ENV.Storage.PING_TIMEOUT} value: {ping_timeout_str!r}') from e
    if ping_timeout <= 0:
        raise BadConfigurationError(f'{ENV.Storage.PING_TIMEOUT} must be positive (given value: {ping_timeout}).')

    settings = AppSettings(
        database_dsn=os.environ.get(ENV.Storage.DATABASE_DSN, '').strip(),
        file_storage_path=os.environ.get(ENV.Storage.FILE_STORAGE_PATH, '').strip(),
        delete_workers=delete_workers,
        ping_timeout=ping_timeout,
    )
    logger.debug('Loaded configuration.', extra={'appEnv': app_env(), 'backend': settings.backend})
    return settings

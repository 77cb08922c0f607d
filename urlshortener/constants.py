from enum import StrEnum


class Defaults:
    """Default values for tunable settings."""

    SHORTCODE_LENGTH = 8  # Hex characters kept from the SHA-256 digest
    DELETE_WORKERS = 5  # Width of the batch deletion worker pool
    PING_TIMEOUT = 1.0  # Seconds before a backend health check gives up
    BASE_URL = 'http://localhost:3000'  # Fallback for local invocations (SAM CLI, tests, etc.)


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'BASE_URL'

    class Storage(StrEnum):
        # Non-empty DSN selects the relational backend
        DATABASE_DSN = 'DATABASE_DSN'
        # Non-empty path selects the log-file backend (ignored when DATABASE_DSN is set)
        FILE_STORAGE_PATH = 'FILE_STORAGE_PATH'
        PING_TIMEOUT = 'PING_TIMEOUT'

    class Pipeline(StrEnum):
        DELETE_WORKERS = 'DELETE_WORKERS'


# Relational backend
URLS_TABLE = 'urls'

# Header carrying a freshly allocated owner id back to the caller
USER_ID_HEADER = 'X-User-Id'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'

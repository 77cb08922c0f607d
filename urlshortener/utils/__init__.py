from urlshortener.utils.config import AppSettings, app_env, app_name, load_config
from urlshortener.utils.helpers import (
    base_url,
    get_short_url,
    request_body,
    event_user_id,
    is_valid_url,
    guarantee_500_response,
    log_request,
)
from urlshortener.utils.hasher import hash_url
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'hash_url',
    'AppSettings',
    'app_env',
    'app_name',
    'load_config',
    'base_url',
    'get_short_url',
    'request_body',
    'event_user_id',
    'is_valid_url',
    'guarantee_500_response',
    'log_request',
    'initialize_logging',
]

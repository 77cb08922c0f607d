"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Public base URL: BASE_URL if set, otherwise derived from the API Gateway event
    request_body() -> str
        Decoded request body of an API Gateway event
    event_user_id() -> int | None
        Caller's owner id from the API Gateway authorizer context
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    is_valid_url() -> bool
        Check a URL is absolute http(s) with a host
    guarantee_500_response(func) -> Callable
        Decorator: Turn unhandled exceptions into a logged 500 response
    log_request(func) -> Callable
        Decorator: Log method, path, status, duration and size of each request

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import time
import base64
import binascii
import logging
import functools
from typing import Any
from urllib.parse import urlsplit
from collections.abc import Callable

from urlshortener.constants import ENV, Defaults, UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    A non-empty BASE_URL environment variable always wins.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    configured = os.environ.get(ENV.App.BASE_URL, '').strip()
    if configured:
        return configured.rstrip('/')

    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return Defaults.BASE_URL


def get_short_url(shortcode: str, base: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base (str): public base URL of the service

    Returns:
        str: short url string representation
    """
    return f'{base.rstrip("/")}/{shortcode}'


def request_body(event: dict[str, Any]) -> str:
    """Return the request body as text, decoding base64 payloads

    Raises:
        ValueError: If a base64-flagged body isn't valid base64 or UTF-8.
    """
    body = event.get('body') or ''
    if not event.get('isBase64Encoded'):
        return body
    try:
        return base64.b64decode(body, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError('Request body is not valid base64-encoded UTF-8.') from e


def event_user_id(event: dict[str, Any]) -> int | None:
    """Extract the caller's owner id from the authorizer context

    Looks at `requestContext.authorizer.claims.user_id` first, then
    `requestContext.authorizer.user_id`. Anything that isn't a positive
    integer counts as no identity.

    Example:
        >>> event_user_id({'requestContext': {'authorizer': {'claims': {'user_id': '7'}}}})
        7
        >>> event_user_id({}) is None
        True
    """
    authorizer = (event.get('requestContext') or {}).get('authorizer') or {}
    claims = authorizer.get('claims') or {}
    raw = claims.get('user_id', authorizer.get('user_id'))

    if isinstance(raw, bool) or raw is None:
        return None
    try:
        user_id = int(raw)
    except (TypeError, ValueError):
        return None
    return user_id if user_id > 0 else None


def is_valid_url(url: str) -> bool:
    """Check whether url is an absolute http(s) URL with a host

    Example:
        >>> is_valid_url('https://example.com/a?b=c')
        True
        >>> is_valid_url('example.com')
        False
    """
    if not isinstance(url, str) or not url or any(ch.isspace() for ch in url):
        return False
    try:
        components = urlsplit(url)
    except ValueError:
        return False
    return components.scheme in {'http', 'https'} and bool(components.netloc)


def guarantee_500_response(func: Callable) -> Callable:
    """Decorator: respond with 500 instead of crashing on unhandled exceptions

    The exception is logged with its traceback before the response is built.
    """

    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: Any, *args, **kwargs) -> dict[str, Any]:
        try:
            return func(event, context, *args, **kwargs)
        except Exception as e:
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'error': e.__class__.__name__},
            )
            return {
                'statusCode': 500,
                'body': json.dumps({'message': 'Internal Server Error', 'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR}),
            }

    return wrapper


def log_request(func: Callable) -> Callable:
    """Decorator: log one line per handled request

    Logged fields: method, path, status, duration (ms), size (response body length).
    """

    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: Any, *args, **kwargs) -> dict[str, Any]:
        start = time.perf_counter()
        response = func(event, context, *args, **kwargs)
        duration_ms = round((time.perf_counter() - start) * 1000, 3)

        logger.info(
            'Handled request.',
            extra={
                'method': event.get('httpMethod'),
                'path': event.get('path'),
                'status': response.get('statusCode'),
                'duration_ms': duration_ms,
                'size': len(response.get('body') or ''),
            },
        )
        return response

    return wrapper

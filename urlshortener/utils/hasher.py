"""Shortcode derivation

Functions:
    hash_url(url, length=8):
        Derive a short, content-addressed key for a URL.

Example:
    >>> from urlshortener.utils import hash_url
    >>> hash_url('https://example.com')
    '100680ad'
"""

import hashlib

from urlshortener.constants import Defaults


def hash_url(url: str, length: int = Defaults.SHORTCODE_LENGTH) -> str:
    """Derive a shortcode from the SHA-256 digest of a URL.

    Args:
        url (str):
            The original URL.

        length (int, optional):
            Number of leading hex characters of the digest to keep.
            Defaults to 8.

    Returns:
        str: Lowercase hex shortcode of exactly `length` characters.

    NOTE:
        - The same URL always yields the same shortcode, so re-submitting
          a URL is detected by the store as an idempotent insert.
        - Truncation makes collisions between distinct URLs possible. Stores
          reject a shortcode claimed for a second, different URL.
    """
    if not isinstance(url, str):
        raise TypeError(f'URL must be of type string (given type: {type(url)}).')
    if not 1 <= length <= 64:
        raise ValueError(f'Length must be between 1 and 64 (given value: {length}).')

    return hashlib.sha256(url.encode('utf-8')).hexdigest()[:length]

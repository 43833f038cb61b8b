"""
Shared utilities for the JSON API.

Request parsing helpers used by every blueprint.
"""
from typing import Optional, Tuple

from flask import request
from flask_limiter.util import get_remote_address


class InvalidParameter(ValueError):
    """A query or body parameter failed validation."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def parse_limit(default: int, maximum: int, name: str = 'limit') -> int:
    """
    Read a positive integer query parameter bounded by `maximum`.

    Raises:
        InvalidParameter: when the value is not an integer in [1, maximum]
    """
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidParameter('invalid_limit', f'{name} must be an integer.')
    if value < 1 or value > maximum:
        raise InvalidParameter('invalid_limit', f'{name} must be between 1 and {maximum}.')
    return value


def parse_offset(name: str = 'offset') -> int:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return 0
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidParameter('invalid_offset', f'{name} must be an integer.')
    if value < 0:
        raise InvalidParameter('invalid_offset', f'{name} must not be negative.')
    return value


def parse_article_id(value) -> int:
    """
    Coerce a JSON articleId (int or numeric string) to int.

    Raises:
        InvalidParameter: when missing, not numeric or fractional
    """
    if value is None or value == '':
        raise InvalidParameter('missing_article_id', 'articleId is required.')
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidParameter('invalid_article_id', 'articleId must be an integer.')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidParameter('invalid_article_id', 'articleId must be an integer.')


def get_client_fingerprint_parts() -> Tuple[Optional[str], Optional[str]]:
    """Client IP and User-Agent for view fingerprinting."""
    return get_remote_address(), request.headers.get('User-Agent')

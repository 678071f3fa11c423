"""Credential extraction from request headers.

Two independent paths:
- Authorization: Bearer <token>  → a user's access or refresh token
- X-API-Key: <key>               → the shared secret of the Polka webhook

The API key is not a user identity and never goes near the JWT codec.
"""

import secrets
from typing import Mapping

AUTHORIZATION_HEADER = "Authorization"
API_KEY_HEADER = "X-API-Key"
BEARER_SCHEME = "Bearer"


class MissingCredential(Exception):
    """No usable credential in the headers."""


def _get_header(headers: Mapping[str, str], name: str) -> str:
    # Starlette's Headers and httpx's are case-insensitive already; plain
    # dicts (tests, scripts) may not be.
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    return value or ""


def extract_bearer(headers: Mapping[str, str]) -> str:
    """Return the token from `Authorization: Bearer <token>`.

    The scheme is case-sensitive. Raises MissingCredential if the header
    is absent, uses another scheme, or has nothing after the prefix.
    """
    value = _get_header(headers, AUTHORIZATION_HEADER).strip()
    if not value.startswith(BEARER_SCHEME):
        raise MissingCredential("no bearer credential")
    token = value[len(BEARER_SCHEME):]
    if token and not token[0].isspace():
        # "Bearerabc" isn't the Bearer scheme
        raise MissingCredential("no bearer credential")
    token = token.strip()
    if not token:
        raise MissingCredential("empty bearer credential")
    return token


def extract_api_key(headers: Mapping[str, str]) -> str:
    """Return the value of the X-API-Key header, stripped."""
    key = _get_header(headers, API_KEY_HEADER).strip()
    if not key:
        raise MissingCredential("no api key")
    return key


def api_key_matches(candidate: str, expected: str) -> bool:
    """Constant-time key comparison. An unset expected key never matches."""
    if not expected:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))

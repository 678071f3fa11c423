"""Authentication and authorization.

Learn: Users log in with email/password and get two tokens:
1. A JWT access token (short-lived, stateless, sent as `Bearer`)
2. An opaque refresh token (long-lived, stored, revocable)

The access token identifies the caller; ownership of a chirp decides
whether they may delete it. The Polka webhook authenticates separately
with a shared API key.
"""

from chirpy.auth.bearer import MissingCredential, extract_api_key, extract_bearer
from chirpy.auth.errors import (
    AuthError,
    CredentialError,
    Forbidden,
    InvalidCredentials,
    MalformedInput,
    NotFound,
    RefreshTokenNotFound,
    Unauthorized,
)
from chirpy.auth.guard import authenticate, authorize_owner
from chirpy.auth.jwt import AccessTokenCodec, TokenError
from chirpy.auth.password import hash_password, verify_password
from chirpy.auth.refresh import RefreshTokenStore

__all__ = [
    "AccessTokenCodec",
    "AuthError",
    "CredentialError",
    "Forbidden",
    "InvalidCredentials",
    "MalformedInput",
    "MissingCredential",
    "NotFound",
    "RefreshTokenNotFound",
    "RefreshTokenStore",
    "TokenError",
    "Unauthorized",
    "authenticate",
    "authorize_owner",
    "extract_api_key",
    "extract_bearer",
    "hash_password",
    "verify_password",
]

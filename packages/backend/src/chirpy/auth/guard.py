"""Authentication and ownership checks.

authenticate() answers "who is calling?", authorize_owner() answers
"may they touch this?". Both reduce every failure to one error kind so
nothing about the reason leaks to the client.
"""

import uuid
from typing import Mapping

import structlog

from chirpy.auth.bearer import MissingCredential, extract_bearer
from chirpy.auth.errors import Forbidden, Unauthorized
from chirpy.auth.jwt import AccessTokenCodec, TokenError

logger = structlog.get_logger()


def authenticate(headers: Mapping[str, str], codec: AccessTokenCodec) -> uuid.UUID:
    """Return the user id of a valid bearer access token, else Unauthorized."""
    try:
        token = extract_bearer(headers)
        return codec.validate(token)
    except MissingCredential as e:
        logger.info("auth.credential_missing", reason=str(e))
        raise Unauthorized() from e
    except TokenError as e:
        logger.info("auth.token_rejected", reason=e.__class__.__name__)
        raise Unauthorized() from e


def authorize_owner(user_id: uuid.UUID, owner_id: uuid.UUID) -> None:
    """Raise Forbidden unless user_id owns the resource.

    Call only after the resource is known to exist, so a missing
    resource is always a 404 and never a 403.
    """
    if user_id != owner_id:
        logger.info("auth.ownership_denied", user_id=str(user_id))
        raise Forbidden()

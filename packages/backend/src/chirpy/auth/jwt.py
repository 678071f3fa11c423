"""JWT access token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. An access
token carries iss, sub (the user id), iat and exp, signed with HS256.
Nothing is stored server-side, so any process holding the same secret
validates a token the same way.

The secret is a constructor argument rather than a module global, and
the clock is injectable. Tests build several codecs side by side (two
secrets, a clock in the past) without patching anything.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

Clock = Callable[[], datetime]

DEFAULT_ISSUER = "chirpy"
DEFAULT_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ["iss", "sub", "iat", "exp"]


def utc_clock() -> datetime:
    return datetime.now(timezone.utc)


class TokenError(Exception):
    """Raised when token verification fails.

    Subclasses say why. That detail is for logs only; callers outside
    the auth package see a single Unauthorized.
    """


class InvalidToken(TokenError):
    """Bad signature, bad encoding or missing claims."""


class InvalidIssuer(TokenError):
    pass


class TokenExpired(TokenError):
    pass


class MalformedSubject(TokenError):
    """The sub claim isn't a user id."""


class AccessTokenCodec:
    """Issues and validates signed access tokens."""

    def __init__(
        self,
        secret: str,
        *,
        issuer: str = DEFAULT_ISSUER,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Clock = utc_clock,
    ):
        self._secret = secret
        self.issuer = issuer
        self.algorithm = algorithm
        self.clock = clock

    def issue(self, user_id: uuid.UUID, ttl: timedelta) -> str:
        """Create a token for user_id that expires ttl from now."""
        now = self.clock()
        payload = {
            "iss": self.issuer,
            "sub": str(user_id),
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> uuid.UUID:
        """Verify a token and return the user id it was issued for.

        Expiry is checked against this codec's clock rather than PyJWT's
        own, so a token is expired from the instant now >= exp. iat is not
        compared with the wall clock either; an issuer whose clock runs
        ahead must not make fresh tokens unusable.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidIssuerError as e:
            raise InvalidIssuer(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken(str(e)) from e

        exp = payload["exp"]
        if not isinstance(exp, (int, float)):
            raise InvalidToken("exp claim is not a timestamp")
        if self.clock().timestamp() >= exp:
            raise TokenExpired("token has expired")

        try:
            return uuid.UUID(payload["sub"])
        except (ValueError, TypeError, AttributeError) as e:
            raise MalformedSubject("sub is not a user id") from e

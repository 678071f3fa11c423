"""Error kinds surfaced by the auth layer.

Every failure inside chirpy.auth is raised as one of these. The API layer
maps each kind to exactly one status code (see chirpy.api.errors) and
returns only the generic public message; anything more specific stays
in the logs.
"""


class AuthError(Exception):
    """Base class. `public_message` is the only text that reaches a client."""

    status_code = 500
    public_message = "Authentication error"


class Unauthorized(AuthError):
    """Missing, invalid or expired credential."""

    status_code = 401
    public_message = "Unauthorized"


class InvalidCredentials(Unauthorized):
    """Login with an unknown email or the wrong password."""

    public_message = "Incorrect email or password"


class Forbidden(AuthError):
    """Authenticated, but not entitled to this resource."""

    status_code = 403
    public_message = "Forbidden"


class NotFound(AuthError):
    status_code = 404
    public_message = "Not found"


class RefreshTokenNotFound(NotFound):
    """No redeemable refresh token. Unknown, expired and revoked look the same."""

    status_code = 401
    public_message = "Invalid refresh token"


class CredentialError(AuthError):
    """The password hashing backend failed. Fatal to the request."""

    status_code = 500
    public_message = "Internal error"


class MalformedInput(AuthError):
    """An identifier or token that can't be parsed."""

    status_code = 400
    public_message = "Malformed input"

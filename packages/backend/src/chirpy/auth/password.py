"""Password hashing utilities.

Learn: Uses bcrypt for password hashing. bcrypt salts automatically
and its cost factor is tunable (rounds=12 is ~100ms per hash on modern
hardware; tests drop it to 4). Passwords are truncated to 72 bytes,
bcrypt's input limit.

verify_password() also accepts a missing hash. Login calls it even when
no user matched the email, and it then checks against a throwaway hash
so that "no such user" and "wrong password" take the same time.
"""

from functools import lru_cache
from typing import Optional

import bcrypt

from chirpy.auth.errors import CredentialError

DEFAULT_ROUNDS = 12
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt.

    Raises CredentialError if the backend fails (bad cost factor,
    entropy source unavailable). Never fails on the password itself.
    """
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")
    except (ValueError, TypeError, OSError) as e:
        raise CredentialError(f"bcrypt hashing failed: {e.__class__.__name__}") from e


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"chirpy-dummy-password", bcrypt.gensalt(rounds=rounds))


def verify_password(
    password: str,
    password_hash: Optional[str],
    rounds: int = DEFAULT_ROUNDS,
) -> bool:
    """Check a password against a stored bcrypt hash (constant-time).

    `rounds` only matters when password_hash is None: it sets the cost
    of the dummy check, which should match the cost of real hashes.
    """
    if password_hash is None:
        bcrypt.checkpw(_encode(password), _dummy_hash(rounds))
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        # Stored value isn't a bcrypt hash
        return False

"""Path and query parameter parsing shared by the routers."""

import uuid

from chirpy.auth.errors import MalformedInput


def parse_uuid(value: str) -> uuid.UUID:
    """Parse an id from the URL or body. Garbage is a 400, not a 404 or 500."""
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError) as e:
        raise MalformedInput(f"not a uuid: {value!r}") from e

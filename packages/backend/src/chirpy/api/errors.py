"""Exception handlers for auth errors.

Learn: chirpy.auth raises typed errors (Unauthorized, Forbidden, ...).
Each maps to one status code and one fixed message here. The exception
text (which claim failed, why a key didn't match) goes to the log and
nowhere else.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chirpy.auth.errors import AuthError, CredentialError

logger = structlog.get_logger()


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
        log = logger.error if isinstance(exc, CredentialError) else logger.info
        log(
            "auth.request_rejected",
            kind=exc.__class__.__name__,
            status=exc.status_code,
            method=request.method,
            path=request.url.path,
            reason=str(exc) or None,
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.public_message},
            headers=headers,
        )

"""Middleware resolving the caller's identity from the bearer token."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from plaza.application.services import (
    Authenticated,
    Rejected,
    RequestIdentityResolver,
)
from plaza.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


class IdentityMiddleware(BaseHTTPMiddleware):
    """Middleware to resolve the request identity once per request.

    - Reads the ``Authorization: Bearer <token>`` header
    - Stores the identity (or None) in request.state.identity
    - Answers 401 with the rejection reason for expired or invalid tokens

    Uses its own short-lived session so a route's unit of work is never
    shared with identity lookup.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request.state.identity = None
        authorization = request.headers.get("Authorization")

        if authorization:
            async with request.app.state.session_maker() as session:
                resolver = RequestIdentityResolver(
                    jwt_service=request.app.state.jwt_service,
                    user_repository=UserRepositorySQLAlchemy(session),
                )
                resolution = await resolver.resolve(authorization)

            if isinstance(resolution, Rejected):
                logger.warning(
                    "Rejected bearer token on %s %s: %s",
                    request.method,
                    request.url.path,
                    resolution.reason.value,
                )
                return JSONResponse(
                    status_code=401,
                    content={
                        "errorCode": resolution.reason.value,
                        "message": resolution.reason.message,
                        "path": request.url.path,
                    },
                )
            if isinstance(resolution, Authenticated):
                request.state.identity = resolution.identity

        return await call_next(request)

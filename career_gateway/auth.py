"""
Authentication Module

Bearer-token gate for recruiter/admin routes. The token is NOT verified
here: the upstream HRMS owns authorization. This service only checks that a
well-formed bearer header is present on protected routes.

Every request passes through get_auth_context (installed as an app-wide
dependency), so a malformed Authorization header is rejected with 401 even
on public routes.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request

from .errors import APIError

logger = logging.getLogger(__name__)


@dataclass
class AuthContext:
    """Request-scoped caller identity."""

    token: Optional[str] = None
    authorization: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return bool(self.token)


async def get_auth_context(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> AuthContext:
    """
    Parse the Authorization header into an AuthContext.

    Raises:
        APIError: 401 if the header is present but not `Bearer <token>`
    """
    if not authorization:
        context = AuthContext()
    else:
        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
            raise APIError(401, "Invalid authorization header")
        context = AuthContext(token=parts[1], authorization=authorization)

    request.state.auth = context
    return context


async def require_auth(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    """
    Require a bearer token.

    Raises:
        APIError: 401 if no token was supplied
    """
    if not auth.authenticated:
        raise APIError(401, "Unauthorized", headers={"WWW-Authenticate": "Bearer"})
    return auth

"""
Request dependencies: service wiring and the access control gate.

authenticate() checks the bearer token and attaches the caller's identity to
request.state; require_role() then enforces the role hierarchy on top of it.
"""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import (
    InsufficientPermissionsError,
    InvalidOrExpiredTokenError,
    MalformedAuthHeaderError,
    MissingAuthHeaderError,
    RateLimitExceededError,
    RoleMissingError,
    StoreFailureError,
    TokenRevokedError,
)
from app.core.rate_limit import LoginRateLimiter
from app.core.roles import Role, role_satisfies
from app.repositories.blacklist import BlacklistRepository
from app.repositories.members import MemberRepository
from app.repositories.news import NewsRepository
from app.repositories.users import UserRepository
from app.schemas.auth import Identity
from app.services.auth_service import AuthService
from app.services.member_service import MemberService
from app.services.news_service import NewsService
from app.services.token_codec import TokenCodec, TokenError, TokenKind

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_login_rate_limiter(request: Request) -> LoginRateLimiter:
    return request.app.state.login_rate_limiter


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthService:
    return AuthService(UserRepository(db), BlacklistRepository(db), codec, settings)


def get_news_service(db: Annotated[Session, Depends(get_db)]) -> NewsService:
    return NewsService(NewsRepository(db))


def get_member_service(db: Annotated[Session, Depends(get_db)]) -> MemberService:
    return MemberService(MemberRepository(db))


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from 'Bearer <token>'; exactly two space-separated parts."""
    if not authorization:
        raise MissingAuthHeaderError()
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise MalformedAuthHeaderError()
    return parts[1]


def authenticate(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> Identity:
    """Dependency: require a valid, non-revoked access token. Raises 401 otherwise."""
    token = extract_bearer_token(request.headers.get("Authorization"))

    try:
        revoked = auth_service.is_token_blacklisted(token)
    except StoreFailureError:
        # Fail closed when revocation status is unknown.
        logger.warning("Blacklist lookup failed; rejecting token", exc_info=True)
        raise InvalidOrExpiredTokenError("Token validation failed.") from None
    if revoked:
        raise TokenRevokedError()

    try:
        claims = codec.verify(token, kind=TokenKind.ACCESS)
    except TokenError as e:
        logger.debug("Access token rejected: %s", e.message)
        raise InvalidOrExpiredTokenError() from None

    identity = Identity(
        user_id=claims.user_id,
        username=claims.username,
        role=claims.role,
        raw_token=token,
    )
    request.state.identity = identity
    return identity


def check_role(role: str | None, required_role: Role) -> None:
    """Raise RoleMissingError / InsufficientPermissionsError unless role satisfies required_role."""
    if not role:
        raise RoleMissingError()
    if not role_satisfies(role, required_role):
        raise InsufficientPermissionsError()


def require_role(required_role: Role) -> Callable[..., Identity]:
    """Build a dependency that authenticates, then enforces the role hierarchy."""

    def dependency(
        request: Request,
        _identity: Annotated[Identity, Depends(authenticate)],
    ) -> Identity:
        # Role comes from the token claims attached by authenticate().
        identity: Identity | None = getattr(request.state, "identity", None)
        check_role(identity.role if identity is not None else None, required_role)
        return identity

    dependency.__name__ = f"require_{required_role.value}"
    return dependency


require_admin = require_role(Role.ADMIN)
require_super_admin = require_role(Role.SUPER_ADMIN)


def login_rate_limit(
    request: Request,
    limiter: Annotated[LoginRateLimiter, Depends(get_login_rate_limiter)],
) -> None:
    """Dependency: per-client-IP login throttle. Raises 429 when exceeded."""
    client_key = request.client.host if request.client else "unknown"
    if not limiter.hit(client_key):
        logger.warning("Login rate limit exceeded", extra={"client": client_key})
        raise RateLimitExceededError()

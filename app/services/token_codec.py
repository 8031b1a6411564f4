"""Sign and verify access/refresh JWTs carrying user identity, role and expiry."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt
from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from app.core.config import Settings

REQUIRED_CLAIMS = ("sub", "username", "role", "type", "iat", "exp", "jti")


class TokenKind(str, enum.Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenClaims(BaseModel):
    """Decoded payload of a verified token."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    username: str
    role: str
    kind: TokenKind
    issued_at: datetime
    expires_at: datetime
    token_id: str


class TokenError(Exception):
    """Base class for token verification failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidTokenSignatureError(TokenError):
    """Signature does not match the configured secret."""


class TokenExpiredError(TokenError):
    """Current time is past the embedded expiry."""


class MalformedTokenError(TokenError):
    """Token cannot be decoded, lacks required claims, or is of the wrong kind."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenCodec:
    """
    Stateless signer/verifier for session tokens.

    One instance is built from settings at startup and shared by every request;
    the secret is held here rather than read from module globals.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenCodec:
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def ttl_for(self, kind: TokenKind) -> timedelta:
        return self.access_ttl if kind == TokenKind.ACCESS else self.refresh_ttl

    def issue(
        self,
        user_id: int,
        username: str,
        role: str,
        kind: TokenKind = TokenKind.ACCESS,
    ) -> str:
        """Create a signed token; exp is issued-at plus the lifetime for kind."""
        kind = TokenKind(kind)
        now = self._clock()
        expire = now + self.ttl_for(kind)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "username": username,
            "role": str(getattr(role, "value", role)),
            "type": kind.value,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            # Random id keeps two tokens minted in the same second distinct.
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str, kind: TokenKind | None = None) -> TokenClaims:
        """
        Verify signature and expiry and return the embedded claims.

        Raises InvalidTokenSignatureError, TokenExpiredError or MalformedTokenError.
        When kind is given, a token of another kind is treated as malformed.
        """
        if not token or not isinstance(token, str):
            raise MalformedTokenError("Token is empty")
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": list(REQUIRED_CLAIMS),
                },
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidTokenSignatureError("Token signature is invalid") from e
        except jwt.PyJWTError as e:
            raise MalformedTokenError(f"Token could not be decoded: {e}") from e

        claims = self._claims_from_payload(payload)
        if self._clock() > claims.expires_at:
            raise TokenExpiredError("Token has expired")
        if kind is not None and claims.kind != TokenKind(kind):
            raise MalformedTokenError(f"Expected a {TokenKind(kind).value} token")
        return claims

    @staticmethod
    def _claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                username=str(payload["username"]),
                role=str(payload["role"]),
                kind=TokenKind(payload["type"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
                token_id=str(payload["jti"]),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise MalformedTokenError(f"Token claims are invalid: {e}") from e

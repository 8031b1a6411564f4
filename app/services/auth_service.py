"""
Authentication service: login, refresh-token rotation, logout revocation,
bootstrap super admin, admin creation and profile updates.

Stateless between calls; all state lives in the user and blacklist stores.
Best-effort side effects (blacklisting a rotated refresh token, clearing the
stored refresh token) are logged on failure and never abort the primary result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, NamedTuple

from app.core.errors import (
    EmailTakenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    RefreshTokenRevokedError,
    StoreFailureError,
    UsernameTakenError,
    UserNotFoundError,
)
from app.core.roles import Role
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.repositories.base import DuplicateRecordError, RecordNotFoundError
from app.services.token_codec import TokenCodec, TokenError, TokenKind

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.repositories.blacklist import BlacklistRepository
    from app.repositories.users import UserRepository
    from app.schemas.auth import CreateAdminRequest, UpdateProfileRequest

logger = logging.getLogger(__name__)


class TokenPair(NamedTuple):
    access_token: str
    refresh_token: str


class LoginResult(NamedTuple):
    user: User
    access_token: str
    refresh_token: str


def _utcnow() -> datetime:
    return datetime.now(UTC)


@lru_cache(maxsize=4)
def _dummy_password_hash(rounds: int) -> str:
    # Checked against when the username is unknown so both failure paths cost a bcrypt round.
    return hash_password("not-a-real-password", rounds=rounds)


class AuthService:
    """Business rules for sessions and staff accounts."""

    def __init__(
        self,
        users: UserRepository,
        blacklist: BlacklistRepository,
        codec: TokenCodec,
        settings: Settings,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.users = users
        self.blacklist = blacklist
        self.codec = codec
        self.settings = settings
        self._clock = clock

    def _hash(self, password: str) -> str:
        return hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)

    def _issue_pair(self, user: User) -> TokenPair:
        role = Role(user.role).value
        return TokenPair(
            access_token=self.codec.issue(user.id, user.username, role, TokenKind.ACCESS),
            refresh_token=self.codec.issue(user.id, user.username, role, TokenKind.REFRESH),
        )

    def _fallback_expiry(self) -> datetime:
        return self._clock() + timedelta(minutes=self.settings.LOGOUT_FALLBACK_EXPIRE_MINUTES)

    def _expiry_or_fallback(self, token: str) -> datetime:
        """Token's own expiry if it verifies, else a short ceiling from now."""
        try:
            return self.codec.verify(token).expires_at
        except TokenError:
            return self._fallback_expiry()

    def _store_refresh_token(self, user_id: int, refresh_token: str | None) -> None:
        try:
            self.users.update_refresh_token(user_id, refresh_token)
        except (StoreFailureError, RecordNotFoundError):
            logger.warning(
                "Could not update stored refresh token",
                extra={"user_id": user_id, "clearing": refresh_token is None},
                exc_info=True,
            )

    def _blacklist_best_effort(self, token: str, user_id: int, expires_at: datetime, reason: str) -> None:
        try:
            self.blacklist.add(token, user_id, expires_at)
        except StoreFailureError:
            logger.warning(
                "Failed to blacklist token during %s; it stays usable until it expires",
                reason,
                extra={"user_id": user_id},
                exc_info=True,
            )

    def login(self, username: str, password: str) -> LoginResult:
        """
        Authenticate and mint an access/refresh pair.

        Unknown username and wrong password raise the same InvalidCredentialsError.
        """
        try:
            user = self.users.get_by_username(username)
        except RecordNotFoundError:
            verify_password(password, _dummy_password_hash(self.settings.BCRYPT_ROUNDS))
            logger.info("Login failed", extra={"username": username})
            raise InvalidCredentialsError() from None

        if not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"username": username})
            raise InvalidCredentialsError()

        pair = self._issue_pair(user)
        self._store_refresh_token(user.id, pair.refresh_token)
        logger.info("Login succeeded", extra={"user_id": user.id, "role": Role(user.role).value})
        return LoginResult(user, pair.access_token, pair.refresh_token)

    def refresh_token(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair. The presented token is single use.

        The new tokens carry the user's current role, not the one embedded in the old token.
        """
        try:
            claims = self.codec.verify(refresh_token, kind=TokenKind.REFRESH)
        except TokenError as e:
            raise InvalidRefreshTokenError() from e

        if self.blacklist.is_blacklisted(refresh_token, now=self._clock()):
            logger.warning("Revoked refresh token presented", extra={"user_id": claims.user_id})
            raise RefreshTokenRevokedError()

        try:
            user = self.users.get_by_id(claims.user_id)
        except RecordNotFoundError:
            raise UserNotFoundError() from None

        self._blacklist_best_effort(refresh_token, user.id, claims.expires_at, "refresh rotation")
        pair = self._issue_pair(user)
        self._store_refresh_token(user.id, pair.refresh_token)
        logger.info("Tokens refreshed", extra={"user_id": user.id})
        return pair

    def logout(self, user_id: int, access_token: str, refresh_token: str | None = None) -> None:
        """
        Revoke the access token (and a presented refresh token) and clear the stored refresh token.

        A token that cannot be parsed is still blacklisted, with a short fallback expiry.
        Safe to call repeatedly with the same token.
        """
        self.blacklist.add(access_token, user_id, self._expiry_or_fallback(access_token))
        if refresh_token:
            self._blacklist_best_effort(
                refresh_token, user_id, self._expiry_or_fallback(refresh_token), "logout"
            )
        self._store_refresh_token(user_id, None)
        logger.info("Logout", extra={"user_id": user_id})

    def is_token_blacklisted(self, token: str) -> bool:
        return self.blacklist.is_blacklisted(token, now=self._clock())

    def create_default_superadmin(self) -> bool:
        """
        Create the well-known super admin if missing. Returns True when a row was created.

        A concurrent creator winning the unique-username race counts as "already exists".
        """
        username = self.settings.DEFAULT_SUPERADMIN_USERNAME
        try:
            self.users.get_by_username(username)
            return False
        except RecordNotFoundError:
            pass

        user = User(
            username=username,
            email=self.settings.DEFAULT_SUPERADMIN_EMAIL,
            password_hash=self._hash(self.settings.DEFAULT_SUPERADMIN_PASSWORD.get_secret_value()),
            role=Role.SUPER_ADMIN,
        )
        try:
            self.users.create(user)
        except DuplicateRecordError as e:
            logger.info("Default super admin already present (conflict on %s)", e.field or "unique key")
            return False

        logger.warning(
            "Default super admin %r created with the configured initial password; "
            "change it after first login.",
            username,
        )
        return True

    def create_admin(self, request: CreateAdminRequest) -> User:
        """Create an admin-role user. Callers must already hold super_admin."""
        if self._username_in_use(request.username):
            raise UsernameTakenError()
        if self._email_in_use(request.email):
            raise EmailTakenError()

        admin = User(
            username=request.username,
            email=request.email,
            password_hash=self._hash(request.password),
            role=Role.ADMIN,
        )
        try:
            admin = self.users.create(admin)
        except DuplicateRecordError as e:
            raise self._taken_error(e) from e
        logger.info("Admin created", extra={"user_id": admin.id, "username": admin.username})
        return admin

    def update_profile(self, user_id: int, request: UpdateProfileRequest) -> User:
        """Change username/email (and password when a non-empty one is given)."""
        user = self.get_user(user_id)

        if request.username != user.username:
            other = self._find(self.users.get_by_username, request.username)
            if other is not None and other.id != user_id:
                raise UsernameTakenError()
        if request.email != user.email:
            other = self._find(self.users.get_by_email, request.email)
            if other is not None and other.id != user_id:
                raise EmailTakenError()

        user.username = request.username
        user.email = request.email
        if request.password:
            user.password_hash = self._hash(request.password)

        try:
            user = self.users.update(user)
        except DuplicateRecordError as e:
            raise self._taken_error(e) from e
        logger.info("Profile updated", extra={"user_id": user_id})
        return user

    def get_user(self, user_id: int) -> User:
        try:
            return self.users.get_by_id(user_id)
        except RecordNotFoundError:
            raise UserNotFoundError() from None

    def cleanup_expired_tokens(self) -> int:
        return self.blacklist.cleanup_expired(now=self._clock())

    @staticmethod
    def _find(lookup: Callable[[str], User], value: str) -> User | None:
        try:
            return lookup(value)
        except RecordNotFoundError:
            return None

    def _username_in_use(self, username: str) -> bool:
        return self._find(self.users.get_by_username, username) is not None

    def _email_in_use(self, email: str) -> bool:
        return self._find(self.users.get_by_email, email) is not None

    @staticmethod
    def _taken_error(error: DuplicateRecordError) -> UsernameTakenError | EmailTakenError:
        if error.field == "email":
            return EmailTakenError()
        return UsernameTakenError()

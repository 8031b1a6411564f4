"""Token blacklist store: revoked tokens kept (by fingerprint) until their own expiry."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import token_fingerprint
from app.models.blacklisted_token import BlacklistedToken
from app.repositories.base import store_errors

logger = logging.getLogger(__name__)

ENTITY = "BlacklistedToken"


class BlacklistRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, token: str, user_id: int, expires_at: datetime) -> bool:
        """
        Blacklist token until expires_at.

        Returns False when the token was already listed; the stored expiry is
        pushed out if the new one is later. Never raises for duplicates.
        """
        fingerprint = token_fingerprint(token)
        entry = BlacklistedToken(token_hash=fingerprint, user_id=user_id, expires_at=expires_at)
        with store_errors(self.session, ENTITY):
            self.session.add(entry)
            try:
                self.session.commit()
            except IntegrityError:
                # Rollback also expunges the pending entry.
                self.session.rollback()
                self._extend(fingerprint, expires_at)
                return False
        return True

    def _extend(self, fingerprint: str, expires_at: datetime) -> None:
        updated = (
            self.session.query(BlacklistedToken)
            .filter(
                BlacklistedToken.token_hash == fingerprint,
                BlacklistedToken.expires_at < expires_at,
            )
            .update({BlacklistedToken.expires_at: expires_at}, synchronize_session=False)
        )
        self.session.commit()
        logger.debug("Token already blacklisted; expiry extended=%s", bool(updated))

    def is_blacklisted(self, token: str, now: datetime | None = None) -> bool:
        """True only if a matching entry exists whose expiry is still in the future."""
        now = now or datetime.now(UTC)
        with store_errors(self.session, ENTITY):
            row = (
                self.session.query(BlacklistedToken.id)
                .filter(
                    BlacklistedToken.token_hash == token_fingerprint(token),
                    BlacklistedToken.expires_at > now,
                )
                .first()
            )
        return row is not None

    def cleanup_expired(self, now: datetime | None = None) -> int:
        """Delete entries at or past their expiry. Returns the number removed."""
        now = now or datetime.now(UTC)
        with store_errors(self.session, ENTITY):
            deleted = (
                self.session.query(BlacklistedToken)
                .filter(BlacklistedToken.expires_at <= now)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return deleted

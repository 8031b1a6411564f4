"""Blacklist maintenance: delete revoked-token entries whose expiry has passed."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.repositories.blacklist import BlacklistRepository

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def run_blacklist_cleanup(session: Session, settings: "Settings") -> int:
    """
    Delete expired blacklist entries. Returns the number of rows removed.

    Expired entries are already ignored by lookups, so this only reclaims space.
    Idempotent: safe to run repeatedly and concurrently with live traffic.
    """
    if not settings.BLACKLIST_CLEANUP_ENABLED:
        logger.info("Blacklist cleanup is disabled (BLACKLIST_CLEANUP_ENABLED=false); skipping.")
        return 0

    deleted_count = BlacklistRepository(session).cleanup_expired()
    if deleted_count > 0:
        logger.info("Blacklist cleanup run: entries_deleted=%s", deleted_count)
    return deleted_count

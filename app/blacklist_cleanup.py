"""
CLI entrypoint for the blacklist cleanup job. Run from cron, e.g.:

  python -m app.blacklist_cleanup

Or hourly: 0 * * * * cd /path/to/cms && .venv/bin/python -m app.blacklist_cleanup
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import session_scope
from app.core.errors import StoreFailureError
from app.core.logging_config import configure_logging
from app.services.blacklist_cleanup import run_blacklist_cleanup

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete blacklist entries that are past their expiry. Exit code 1 on store failure."""
    settings = get_settings()
    configure_logging(settings)
    with session_scope() as db:
        try:
            deleted = run_blacklist_cleanup(db, settings)
        except StoreFailureError as e:
            logger.error("Blacklist cleanup failed: %s", e)
            return 1
    logger.info("Blacklist cleanup completed: entries_deleted=%s", deleted)
    return 0


if __name__ == "__main__":
    sys.exit(main())

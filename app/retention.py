"""
CLI entrypoint for the refresh-token retention job. Run from cron, e.g.:

  python -m app.retention

Or hourly: 0 * * * * cd /path/to/synergysphere && .venv/bin/python -m app.retention
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.services.retention import purge_expired_refresh_tokens

logger = logging.getLogger(__name__)


def main() -> int:
    """Run retention: delete refresh tokens whose expiry has passed."""
    settings = get_settings()
    configure_logging(settings)
    db = SessionLocal()
    try:
        deleted = purge_expired_refresh_tokens(db, settings)
        logger.info("Retention completed: refresh_tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Retention job failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())

"""Data retention: delete refresh-token rows whose expiry has passed."""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.models import RefreshToken

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def purge_expired_refresh_tokens(session: Session, settings: "Settings") -> int:
    """
    Delete refresh tokens past their expires_at. Returns the number deleted.

    Expired rows are already rejected by /auth/refresh; this only reclaims
    space. Idempotent: safe to run repeatedly.
    """
    if not settings.REFRESH_TOKEN_RETENTION_ENABLED:
        logger.info(
            "Retention is disabled (REFRESH_TOKEN_RETENTION_ENABLED=false); skipping."
        )
        return 0

    cutoff = datetime.now(timezone.utc)
    deleted_count = (
        session.query(RefreshToken)
        .filter(RefreshToken.expires_at < cutoff)
        .delete(synchronize_session=False)
    )
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Retention run: cutoff=%s, refresh_tokens_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count

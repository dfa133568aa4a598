"""
Delete expired rows from guard_sessions. Run from cron, e.g.:

  python -m app.scripts.prune_sessions

Or hourly: 0 * * * * cd /path/to/gateway && .venv/bin/python -m app.scripts.prune_sessions
"""

import logging
import sys

from app.core.database import session_scope
from app.services.session import SqlSessionRepository

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Purge expired guard sessions; returns a process exit code."""
    try:
        with session_scope() as db:
            deleted = SqlSessionRepository(db).purge_expired()
    except Exception as e:
        logger.exception("Session prune failed: %s", e)
        return 1
    logger.info("Session prune completed: sessions_deleted=%s", deleted)
    return 0


if __name__ == "__main__":
    sys.exit(main())

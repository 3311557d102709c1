"""Command-line entrypoints: the API server and the investment refresh job."""
import logging
import os

import uvicorn

from networth.api.deps import build_orchestrator
from networth.config.logging_config import setup_logging
from networth.main import app
from networth.repositories.sqlalchemy.database import init_db, session_scope

logger = logging.getLogger(__name__)


def main() -> None:
    host = os.environ.get("NETWORTH_HOST", "127.0.0.1")
    port = int(os.environ.get("NETWORTH_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


def refresh_investments() -> int:
    """
    Rebuild brokerage and standalone investment snapshots for every user.

    Run after new security prices land. Returns a non-zero exit code when
    any account failed.
    """
    setup_logging()
    init_db()
    with session_scope() as db:
        results = build_orchestrator(db).recalculate_all_investment_snapshots()

    failed = [r for r in results if not r.ok]
    for result in failed:
        logger.error("Investment refresh failed for account %s: %s", result.account_id, result.error)
    return 1 if failed else 0


if __name__ == "__main__":
    main()

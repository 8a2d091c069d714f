from __future__ import annotations

import logging
import time

from sqlalchemy import bindparam, create_engine, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from api_smoke.checks.results import DatabaseCheckResult
from api_smoke.checks.tcp_check import run_tcp
from api_smoke.config import DatabaseTarget

logger = logging.getLogger(__name__)

EXPECTED_TABLES = ("auth_users", "departments", "profiles")

TABLES_QUERY = text(
    "SELECT table_name FROM information_schema.tables "
    "WHERE table_schema = 'public' AND table_name IN :names "
    "ORDER BY table_name"
).bindparams(bindparam("names", value=list(EXPECTED_TABLES), expanding=True))


def build_database_url(db: DatabaseTarget) -> URL:
    return URL.create(
        "postgresql+psycopg",
        username=db.user,
        password=db.password,
        host=db.host,
        port=db.port,
        database=db.name,
    )


def check_database(db: DatabaseTarget, timeout_s: float = 3) -> DatabaseCheckResult:
    """Log in with the configured credentials, run SELECT 1, list known tables."""
    logger.info("Checking database %s at %s:%s...", db.name, db.host, db.port)
    start = time.perf_counter()

    reach = run_tcp(db.host, db.port, timeout_s=timeout_s)
    if not reach.ok:
        logger.error("Database not reachable: %s", reach.error)
        return DatabaseCheckResult(ok=False, latency_ms=reach.latency_ms, error=reach.error)

    engine = create_engine(
        build_database_url(db),
        poolclass=NullPool,
        connect_args={"connect_timeout": max(1, int(timeout_s))},
    )
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            tables = list(conn.execute(TABLES_QUERY).scalars().all())
    except SQLAlchemyError as exc:
        latency_ms = int((time.perf_counter() - start) * 1000)
        error = str(getattr(exc, "orig", None) or exc)
        logger.error("Database query failed: %s", error)
        return DatabaseCheckResult(ok=False, latency_ms=latency_ms, error=error)
    finally:
        engine.dispose()

    latency_ms = int((time.perf_counter() - start) * 1000)
    logger.info("Connected as %s (%s ms)", db.user, latency_ms)
    for name in EXPECTED_TABLES:
        logger.info("   - %s: %s", name, "found" if name in tables else "missing")
    return DatabaseCheckResult(ok=True, latency_ms=latency_ms, tables=tables)

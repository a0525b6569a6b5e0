"""Block until the Postgres behind DATABASE_URL accepts connections.

Imported for its side effect by start_api.py; SQLite URLs return immediately.
"""
import logging
import os
import time
from urllib.parse import urlparse

import psycopg2

logger = logging.getLogger("wait_for_db")

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise SystemExit("DATABASE_URL is not set")


def _wait(url: str, timeout_s: int) -> None:
    # SQLAlchemy URLs carry a driver suffix psycopg2 does not understand
    p = urlparse(url.replace("postgresql+psycopg2://", "postgresql://").replace("postgres://", "postgresql://"))
    params = dict(
        host=p.hostname or "db",
        port=p.port or 5432,
        user=p.username or "tourbirth",
        password=p.password or "tourbirth",
        dbname=(p.path or "/tourbirth").lstrip("/") or "tourbirth",
    )
    logger.info("waiting for Postgres at %s:%s db=%s (timeout=%ss)", params["host"], params["port"], params["dbname"], timeout_s)
    deadline = time.time() + timeout_s
    while True:
        try:
            psycopg2.connect(**params).close()
            logger.info("Postgres is ready")
            return
        except psycopg2.OperationalError as e:
            if time.time() > deadline:
                logger.error("timed out waiting for Postgres: %s", e)
                raise
            time.sleep(1)


if DATABASE_URL.startswith(("postgres://", "postgresql")):
    _wait(DATABASE_URL, int(os.getenv("DB_WAIT_TIMEOUT", "60")))

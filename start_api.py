#!/usr/bin/env python3
"""
Boot sequence: wait for the database, apply migrations, seed, then exec uvicorn.
"""
import logging
import os
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

import wait_for_db  # noqa: F401,E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.config import settings  # noqa: E402

alembic_cfg = Config(os.path.join(os.path.dirname(os.path.abspath(__file__)), "alembic.ini"))
alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
command.upgrade(alembic_cfg, "head")

# Seed on a fresh engine so it sees the freshly migrated schema
seed_engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
from app.seed import run as run_seed  # noqa: E402
seed_db = sessionmaker(autocommit=False, autoflush=False, bind=seed_engine)()
run_seed(seed_db)
seed_db.close()
seed_engine.dispose()

os.execv(
    sys.executable,
    [sys.executable, "-m", "uvicorn", "app.main:app", "--host", "0.0.0.0", "--port", os.getenv("PORT", "8000")],
)

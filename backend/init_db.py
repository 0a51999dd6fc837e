from database import Base
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
import logging

import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


def _check_column_exists(inspector, table: str, column: str) -> bool:
    """Check if a column exists in a table"""
    try:
        columns = [col['name'] for col in inspector.get_columns(table)]
        return column in columns
    except Exception:
        return False


def _add_column_if_missing(engine: Engine, inspector, table: str, column: str, column_def: str):
    """Add a column to a table if it doesn't exist"""
    if not _check_column_exists(inspector, table, column):
        logger.info(f"Running migration: Adding '{column}' column to {table} table...")
        with engine.connect() as conn:
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {column_def}"))
            conn.commit()
        logger.info(f"Migration complete: '{column}' column added to {table}")
        return True
    return False


def _timestamp_type(engine: Engine) -> str:
    return "TIMESTAMP" if engine.dialect.name == 'postgresql' else "DATETIME"


def _run_essential_migrations(engine: Engine) -> int:
    """
    Upgrade databases created before the current schema.

    Only adds nullable columns, so it is safe to run on every startup.
    """
    inspector = inspect(engine)
    tables = inspector.get_table_names()
    migrations_run = 0

    # ============================================================
    # Jobs table migrations
    # ============================================================
    if 'jobs' in tables:
        # Migration: Add failure message column
        if _add_column_if_missing(engine, inspector, 'jobs', 'error', "TEXT"):
            migrations_run += 1

        # Migration: Add last-change timestamp
        if _add_column_if_missing(engine, inspector, 'jobs', 'updated_at', _timestamp_type(engine)):
            migrations_run += 1

    if migrations_run > 0:
        logger.info(f"Database schema updated: {migrations_run} migration(s) applied")
    else:
        logger.debug("Database schema is up to date")

    return migrations_run


def init_database(engine: Engine) -> int:
    """
    Create the videos and jobs tables and apply column migrations.

    Returns:
        Number of column migrations applied
    """
    Base.metadata.create_all(bind=engine)

    # Run essential migrations that are safe to auto-apply
    try:
        migrations_run = _run_essential_migrations(engine)
    except Exception as e:
        logger.warning(f"Migration warning (non-fatal): {e}")
        migrations_run = 0

    logger.info("Database initialized successfully")
    return migrations_run


if __name__ == "__main__":
    from config.settings import Settings
    from database import Database

    database = Database.from_settings(Settings.from_env())
    init_database(database.connect())
    database.close()

"""
Alembic environment for the employees and i9_forms schema.

No SQLAlchemy models: revisions are hand-written to mirror db._DDL, which
Store.init_db also applies at startup, so both paths yield the same tables.
"""

import os
import logging
from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

DATABASE_URL = os.environ.get("DATABASE_URL", "")

if DATABASE_URL:
    # Escape % for configparser in case the raw URL contains percent-encoded chars.
    config.set_main_option("sqlalchemy.url", DATABASE_URL.replace("%", "%%"))

target_metadata = None


def run_migrations_offline() -> None:
    if not DATABASE_URL:
        logger.warning("No DATABASE_URL set -- skipping offline migration")
        return
    context.configure(url=DATABASE_URL, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    if not DATABASE_URL:
        logger.warning("No DATABASE_URL set -- skipping online migration")
        return
    connectable = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

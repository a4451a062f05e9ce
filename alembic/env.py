# alembic/env.py

import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# ------------------------------------------------------------------------------
# Run from the project root so "app" is importable; this also loads .env
# ------------------------------------------------------------------------------
sys.path.insert(0, os.getcwd())

from app.core.config import Settings
from app.core.database import Base, normalize_database_url
import app.db.models  # noqa: F401  (populates Base.metadata)

config = context.config

real_url = Settings().database_url
if real_url is None:
    raise RuntimeError("DATABASE_URL is not set in your environment.")
config.set_main_option("sqlalchemy.url", normalize_database_url(real_url))

if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL scripts without a database connection."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

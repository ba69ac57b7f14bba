"""Alembic environment for liftlog.

The URL comes from Settings (DATABASE_DSN or the DATABASE_* parts) and can be
overridden per run with `alembic -x dsn=sqlite:///./liftlog.db upgrade head`.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from liftlog.core.config import get_settings
from liftlog.db.base import Base
from liftlog.models import *  # noqa: F401, F403 - register all models

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def migration_url() -> str:
    """Sync URL: -x dsn=... first, then the app settings."""
    override = context.get_x_argument(as_dictionary=True).get("dsn")
    if override:
        return override.replace("+aiosqlite", "").replace("+asyncpg", "")
    return get_settings().database_url


def configure_context(url: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite can't ALTER most columns in place
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline(url: str) -> None:
    """Emit SQL to stdout instead of connecting."""
    configure_context(url, url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            configure_context(url, connection=connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline(migration_url())
else:
    run_migrations_online(migration_url())

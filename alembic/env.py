import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from stch_vehicular.config.settings import get_settings
from stch_vehicular.db import ConcessionBase, UsersBase, VehicleBase

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()

# ini section -> (metadata, database url)
TARGETS = {
    "vehicle": (VehicleBase.metadata, settings.vehicle_database_url),
    "concession": (ConcessionBase.metadata, settings.concession_database_url),
    "users": (UsersBase.metadata, settings.users_database_url),
}

target_metadata, database_url = TARGETS[config.config_ini_section]


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())

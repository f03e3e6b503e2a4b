"""
Database base configuration.

Handles async engine creation, database bootstrap and Alembic migrations.
"""
import asyncio
import contextlib
import functools
import logging
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config as alembic_config
from sqlalchemy import text
from sqlalchemy.engine.url import URL
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from carbon_ledger.core.config import Config

DEFAULT_DRIVER = "postgresql+asyncpg"

engine_kw = {
    "pool_pre_ping": True,
    # feature will normally emit SQL equivalent to "SELECT 1" each time a connection is checked out from the pool
    "pool_size": 2,  # number of connections to keep open at a time
    "max_overflow": 4,  # number of connections to allow to be opened above pool_size
}

asyncpg_connect_args = {
    "prepared_statement_cache_size": 0,  # disable prepared statement cache
    "statement_cache_size": 0,  # disable statement cache
}


def get_db_url(config: Config) -> URL:
    """
    Construct database URL from config.
    """
    config_db = dict(config.data["db"])
    drivername = config_db.pop("drivername", DEFAULT_DRIVER)
    return URL.create(drivername=drivername, **config_db)


def get_engine_kw(async_db_url: URL) -> dict[str, Any]:
    """
    Engine keyword arguments for the driver in ``async_db_url``.

    The statement cache settings only exist for asyncpg.
    """
    kw = dict(engine_kw)
    if async_db_url.drivername == DEFAULT_DRIVER:
        kw["connect_args"] = dict(asyncpg_connect_args)
    return kw


def get_async_engine(async_db_url: URL, **kw: Any) -> AsyncEngine:
    """
    Create async database engine with connection pooling.
    """
    options = {"pool_recycle": 3600, "pool_pre_ping": True}
    options.update(kw)
    return create_async_engine(async_db_url, **options)


async def create_database(config: Config) -> bool:
    """
    Ensures the PostgreSQL database specified in the config exists.
    Connects to the 'postgres' maintenance database to issue CREATE DATABASE.

    Args:
        config: The application configuration.

    Returns:
        True if the database was newly created by this function.
        False if the database already existed or the driver is not PostgreSQL.

    Raises:
        ValueError: If the database name is missing in the configuration.
    """
    db_params = dict(config.data["db"])
    drivername = db_params.pop("drivername", DEFAULT_DRIVER)
    target_database_name = db_params.pop("database", None)

    if not target_database_name:
        logging.error("Database name not found in configuration for creation.")
        raise ValueError("Database name missing in configuration for creation.")

    if not drivername.startswith("postgresql"):
        logging.info(f"Driver {drivername} creates databases on connect, skipping")
        return False

    maintenance_url = URL.create(
        drivername=drivername, **{**db_params, "database": "postgres"}
    )
    maintenance_engine = None
    try:
        maintenance_engine = get_async_engine(maintenance_url)
        logging.info(
            f"Attempting to create database '{target_database_name}' in {db_params.get('host')} if it does not exist."
        )
        async with maintenance_engine.connect() as connection:
            # CREATE DATABASE cannot run inside a transaction block
            autocommit_connection = await connection.execution_options(
                isolation_level="AUTOCOMMIT"
            )
            await autocommit_connection.execute(
                text(f'CREATE DATABASE "{target_database_name}"')
            )
        logging.info(f"Database '{target_database_name}' created successfully.")
        return True
    except DBAPIError as e:
        # 42P04 is duplicate_database
        with contextlib.suppress(AttributeError):
            if getattr(e.orig, "pgcode", None) == "42P04":
                logging.warning(
                    f"Database '{target_database_name}' already exists. No action taken."
                )
                return False

        logging.error(
            f"A DBAPIError occurred while trying to create database '{target_database_name}': {e}"
        )
        raise
    finally:
        if maintenance_engine:
            await maintenance_engine.dispose()


async def apply_db_migration(config: Config):
    """
    Create the database if needed and upgrade it to the latest Alembic revision.

    Blocks until the upgrade is complete so the schema is consistent before
    anything reads from it.

    Args:
        config: The application configuration containing database connection details.
    """
    await create_database(config)

    alembic_cfg = alembic_config(str(Path.cwd() / "alembic.ini"))
    alembic_cfg.set_main_option(
        "script_location", str(Path.cwd() / "alembic_migrations")
    )

    # Alembic runs on a synchronous driver
    async_url = get_db_url(config)
    sync_url = async_url.set(
        drivername=async_url.drivername.replace("+asyncpg", "+psycopg2").replace(
            "+aiosqlite", ""
        )
    )
    # configparser interpolation treats "%" as special
    alembic_cfg.set_main_option(
        "sqlalchemy.url",
        sync_url.render_as_string(hide_password=False).replace("%", "%%"),
    )

    logging.info("Starting database migrations...")
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(
        None, functools.partial(command.upgrade, alembic_cfg, "head")
    )
    logging.info("Database migration completed successfully")

from typing import Dict, Optional
import structlog
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..config.settings import Settings, get_settings
from .base import VehicleBase, ConcessionBase, UsersBase

logger = structlog.get_logger()


def _enable_sqlite_transactions(engine: AsyncEngine) -> None:
    """Let SQLAlchemy drive BEGIN/SAVEPOINT on SQLite and enforce foreign keys."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_conn, conn_record):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class DatabaseManager:
    """Async engines and session factories for the three STCH databases."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        self.vehicle_engine = self._create_engine(self.settings.vehicle_database_url)
        self.concession_engine = self._create_engine(self.settings.concession_database_url)
        self.users_engine = self._create_engine(self.settings.users_database_url)

        self.vehicle_sessions = async_sessionmaker(
            self.vehicle_engine, class_=AsyncSession, expire_on_commit=False
        )
        self.concession_sessions = async_sessionmaker(
            self.concession_engine, class_=AsyncSession, expire_on_commit=False
        )
        self.users_sessions = async_sessionmaker(
            self.users_engine, class_=AsyncSession, expire_on_commit=False
        )

    def _create_engine(self, url: str) -> AsyncEngine:
        if url.startswith("sqlite"):
            engine = create_async_engine(url, echo=self.settings.db_echo)
            _enable_sqlite_transactions(engine)
            return engine

        return create_async_engine(
            url,
            echo=self.settings.db_echo,
            pool_size=self.settings.db_pool_size,
            max_overflow=self.settings.db_max_overflow,
            pool_timeout=self.settings.db_pool_timeout,
            pool_pre_ping=True,
        )

    @property
    def engines(self) -> Dict[str, AsyncEngine]:
        return {
            "vehicle": self.vehicle_engine,
            "concession": self.concession_engine,
            "users": self.users_engine,
        }

    async def create_all(self) -> None:
        """Create all tables (development and tests; production uses Alembic)."""
        for engine, base in (
            (self.vehicle_engine, VehicleBase),
            (self.concession_engine, ConcessionBase),
            (self.users_engine, UsersBase),
        ):
            async with engine.begin() as conn:
                await conn.run_sync(base.metadata.create_all)

    async def ping(self) -> Dict[str, bool]:
        """Check connectivity of every database."""
        status = {}
        for name, engine in self.engines.items():
            try:
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                status[name] = True
            except (SQLAlchemyError, OSError) as e:
                logger.warning("Database ping failed", database=name, error=str(e))
                status[name] = False
        return status

    async def dispose(self) -> None:
        for engine in self.engines.values():
            await engine.dispose()

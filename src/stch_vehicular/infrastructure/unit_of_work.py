"""Vehicle database unit of work."""

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..domain.errors import TransactionError
from .repositories import (
    SqlAuditRepository,
    SqlCatalogRepository,
    SqlCategoryRepository,
    SqlVehicleRepository,
)

logger = structlog.get_logger()


class SqlVehicleUnitOfWork:
    """
    One vehicle-database transaction shared by the catalog, category,
    vehicle and audit repositories.

    Leaving the context without ``commit()`` rolls everything back.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory
        self.session = None
        self._committed = False

    async def __aenter__(self) -> "SqlVehicleUnitOfWork":
        self.session = self.session_factory()
        self._committed = False

        try:
            await self.session.connection()
        except (SQLAlchemyError, OSError) as e:
            await self.session.close()
            raise TransactionError("Could not begin vehicle transaction") from e

        self.catalogs = SqlCatalogRepository(self.session)
        self.categories = SqlCategoryRepository(self.session)
        self.vehicles = SqlVehicleRepository(self.session)
        self.audit = SqlAuditRepository(self.session)
        return self

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("Vehicle transaction commit failed") from e
        self._committed = True

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("Vehicle transaction rollback failed") from e

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if not self._committed:
                await self.rollback()
        except TransactionError as e:
            # keep the original failure when one is already propagating
            logger.error("Rollback failed", error=str(e.__cause__))
            if exc_type is None:
                raise
        finally:
            await self.session.close()

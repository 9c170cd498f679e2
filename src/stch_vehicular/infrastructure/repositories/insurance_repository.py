"""Insurance repository implementation for the concessions database."""

from datetime import datetime
from typing import Optional
import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...db.models import Aseguradora, Concesion
from ...domain.entities.vehicle_modification import InsurancePolicy
from ...domain.errors import NotFoundError, TransactionError
from ...domain.interfaces import IInsuranceRepository

logger = structlog.get_logger()


class SqlInsuranceRepository(IInsuranceRepository):
    """One policy row per concession; every upsert runs in its own transaction."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def upsert(self, policy: InsurancePolicy) -> bool:
        try:
            try:
                await self._upsert_once(policy)
            except IntegrityError:
                # Concurrent first insert for the same concession; the row exists now
                logger.debug("Insurance insert conflict, retrying as update",
                             concession_id=policy.concession_id)
                await self._upsert_once(policy)
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError(
                "Insurance write failed", {"concession_id": policy.concession_id}
            ) from e

        return True

    async def _upsert_once(self, policy: InsurancePolicy) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                concession = await session.get(Concesion, policy.concession_id)
                if concession is None:
                    raise NotFoundError(
                        f"Concession {policy.concession_id} not found",
                        {"concession_id": policy.concession_id},
                    )

                row = await self._current(session, policy.concession_id)
                if row is None:
                    row = Aseguradora(id_concesion=policy.concession_id)
                    session.add(row)

                row.nombre_aseguradora = policy.insurer_name
                row.numero_poliza = policy.policy_number
                row.fecha_expedicion = policy.issue_date
                row.fecha_vencimiento = policy.expiration_date
                row.folio_pago = policy.payment_folio
                row.observaciones = policy.remarks
                row.fecha_actualizacion = policy.updated_at or datetime.now()

    async def get(self, concession_id: int) -> Optional[InsurancePolicy]:
        try:
            async with self.session_factory() as session:
                row = await self._current(session, concession_id)
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError(
                "Insurance read failed", {"concession_id": concession_id}
            ) from e

        if row is None:
            return None

        return InsurancePolicy(
            concession_id=row.id_concesion,
            insurer_name=row.nombre_aseguradora,
            policy_number=row.numero_poliza,
            issue_date=row.fecha_expedicion,
            expiration_date=row.fecha_vencimiento,
            payment_folio=row.folio_pago,
            remarks=row.observaciones,
            updated_at=row.fecha_actualizacion,
        )

    @staticmethod
    async def _current(session: AsyncSession, concession_id: int) -> Optional[Aseguradora]:
        result = await session.execute(
            select(Aseguradora).where(Aseguradora.id_concesion == concession_id)
        )
        return result.scalar_one_or_none()

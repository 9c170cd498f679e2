"""Acting-user lookups against the users database."""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ...db.models import UsuarioPerfil
from ...domain.entities.vehicle_modification import ActingUser
from ...domain.errors import TransactionError
from ...domain.interfaces import IActingUserRepository


class SqlActingUserRepository(IActingUserRepository):

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def find(self, user_id: int) -> Optional[ActingUser]:
        try:
            async with self.session_factory() as session:
                profile = await session.get(UsuarioPerfil, user_id)
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("User lookup failed", {"user_id": user_id}) from e

        if profile is None:
            return None

        return ActingUser(
            user_id=profile.id_usuario,
            profile_id=profile.id_perfil,
            smart_card_id=profile.id_tarjeta_inteligente,
            delegation_id=profile.id_delegacion,
        )

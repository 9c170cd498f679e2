"""Audit trail domain service."""

from ..entities.vehicle_modification import OPERATION_MODIFY, ActingUser
from ..interfaces import IAuditRepository


class AuditLogger:
    """Appends one audit entry per successful vehicle update."""

    def __init__(self, audit_repository: IAuditRepository):
        self.audit_repository = audit_repository

    async def record_modification(self, vehicle_id: int, serial: str, user: ActingUser) -> int:
        # Missing user fields are recorded as 0
        return await self.audit_repository.append(
            vehicle_id, serial, user.with_defaults(), OPERATION_MODIFY
        )

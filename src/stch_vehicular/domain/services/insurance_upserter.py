"""Insurance upsert domain service."""

from ..entities.vehicle_modification import InsurancePolicy
from ..errors import InsuranceUpsertError, VehicleRegistryError
from ..interfaces import IInsuranceRepository


class InsuranceUpserter:
    """Writes the concession's insurance policy in its own transaction."""

    def __init__(self, insurance_repository: IInsuranceRepository):
        self.insurance_repository = insurance_repository

    async def upsert(self, policy: InsurancePolicy) -> bool:
        """
        Insert or overwrite the policy of ``policy.concession_id``.

        Re-running with the same policy leaves the same single row.

        Raises:
            InsuranceUpsertError: the concession is unknown or the write failed
        """
        try:
            return await self.insurance_repository.upsert(policy)
        except InsuranceUpsertError:
            raise
        except VehicleRegistryError as e:
            raise InsuranceUpsertError(
                e.message, {"concession_id": policy.concession_id, "cause": e.code}
            ) from e

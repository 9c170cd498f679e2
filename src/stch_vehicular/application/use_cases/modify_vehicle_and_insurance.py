"""Use case for modifying a vehicle and its concession's insurance policy."""

import asyncio
import time
from typing import Any, Callable, Dict, List, Optional
import structlog

from ...domain.entities.vehicle_modification import (
    ActingUser,
    ModificationOutcome,
    ModificationRequest,
    VehicleCatalogIds,
    WorkflowState,
)
from ...domain.errors import (
    InsuranceUpsertError,
    TransactionError,
    ValidationError,
    WorkflowTimeoutError,
)
from ...domain.interfaces import IActingUserRepository
from ...domain.services.audit_logger import AuditLogger
from ...domain.services.category_resolver import CategoryResolver
from ...domain.services.insurance_upserter import InsuranceUpserter
from ...domain.services.lookup_resolver import LookupResolver
from ...domain.services.vehicle_updater import VehicleRecordUpdater
from ...utils.logging import modification_logger

logger = structlog.get_logger()

MIN_MODEL_YEAR = 1900
MAX_MODEL_YEAR = 2100


def validate_input(request: ModificationRequest) -> List[str]:
    """Validate a modification request; returns every problem found."""
    errors = []
    vehicle = request.vehicle
    insurance = request.insurance

    for name, value in (
        ("serial", vehicle.serial),
        ("class", vehicle.vehicle_class),
        ("type", vehicle.vehicle_type),
        ("make", vehicle.make),
        ("submodel", vehicle.submodel),
        ("insurerName", insurance.insurer_name),
        ("policyNumber", insurance.policy_number),
    ):
        if value is None or not str(value).strip():
            errors.append(f"{name} is required")

    if vehicle.year is None:
        errors.append("year is required")
    elif not MIN_MODEL_YEAR <= vehicle.year <= MAX_MODEL_YEAR:
        errors.append(f"year must be between {MIN_MODEL_YEAR} and {MAX_MODEL_YEAR}")

    for name, value in (
        ("passengers", vehicle.passengers),
        ("cylinders", vehicle.cylinders),
        ("doors", vehicle.doors),
    ):
        if value is not None and value < 0:
            errors.append(f"{name} cannot be negative")

    if insurance.concession_id is None or insurance.concession_id <= 0:
        errors.append("concessionId must be a positive integer")

    if insurance.issue_date is None:
        errors.append("issueDate is required")
    if insurance.expiration_date is None:
        errors.append("expirationDate is required")
    if (insurance.issue_date is not None and insurance.expiration_date is not None
            and insurance.expiration_date < insurance.issue_date):
        errors.append("expirationDate cannot be before issueDate")

    return errors


class ModifyVehicleAndInsuranceUseCase:
    """
    Coordinates the modification workflow.

    The vehicle side (lookups, category, vehicle row, audit entry) runs in one
    vehicle-database transaction. The insurance policy is written afterwards
    in its own concession-database transaction, so its failure leaves the
    vehicle committed and is reported as a partial success.
    """

    def __init__(self,
                 unit_of_work_factory: Callable,
                 insurance_upserter: InsuranceUpserter,
                 acting_user_repository: Optional[IActingUserRepository] = None,
                 modification_timeout: float = 30.0,
                 insurance_timeout: float = 15.0):
        self.unit_of_work_factory = unit_of_work_factory
        self.insurance_upserter = insurance_upserter
        self.acting_user_repository = acting_user_repository
        self.modification_timeout = modification_timeout
        self.insurance_timeout = insurance_timeout

    async def execute(self, request: ModificationRequest) -> ModificationOutcome:
        """
        Execute the modification.

        Process:
        1. Validate the request (no database call on failure)
        2. Resolve the acting user
        3. Vehicle transaction: lookups, category, vehicle row, audit entry, commit
        4. Insurance upsert

        Raises:
            ValidationError: the request is incomplete or malformed
            NotFoundError: no vehicle has the serial number
            LookupCreationError, TransactionError: vehicle side rolled back
            WorkflowTimeoutError: the vehicle phase exceeded its deadline
        """
        errors = validate_input(request)
        if errors:
            raise ValidationError(errors)

        start_time = time.time()
        serial = request.vehicle.serial
        states = [WorkflowState.IDLE]

        modification_logger.log_start(
            serial, request.insurance.concession_id, request.acting_user.user_id
        )

        user = await self._resolve_acting_user(request.acting_user)

        committed = {}
        try:
            await asyncio.wait_for(
                self._run_vehicle_phase(request, user, states, committed),
                timeout=self.modification_timeout,
            )
        except asyncio.TimeoutError as e:
            if WorkflowState.VEHICLE_COMMITTED not in states:
                self._abort(serial, states, "deadline exceeded")
                raise WorkflowTimeoutError(
                    f"Vehicle modification exceeded {self.modification_timeout}s",
                    {"serial": serial, "state": states[-2].value},
                ) from e
            # deadline hit while releasing the session, the commit stands
            logger.warning("Deadline reached after vehicle commit", serial=serial)
        except Exception as e:
            if WorkflowState.VEHICLE_COMMITTED not in states:
                self._abort(serial, states, str(e))
                raise
            logger.warning("Session release failed after vehicle commit",
                           serial=serial,
                           error=str(e))

        vehicle_id = committed["vehicle_id"]
        lookups = committed["lookups"]
        catalog_ids = committed["catalog_ids"]

        modification_logger.log_vehicle_committed(
            serial, vehicle_id, lookups.created, (time.time() - start_time) * 1000
        )

        outcome = ModificationOutcome(
            vehicle_id=vehicle_id,
            vehicle_updated=True,
            insurance_updated=True,
            category_id=catalog_ids.category_id,
            states=states,
            created_entries=list(lookups.created),
            warnings=list(lookups.warnings),
        )

        self._transition(serial, states, WorkflowState.INSURANCE_UPSERTING)
        insurance_error = await self._run_insurance_phase(request)
        if insurance_error is not None:
            modification_logger.log_insurance_failed(
                serial, request.insurance.concession_id, insurance_error
            )
            outcome = outcome.with_insurance_failure(insurance_error)

        self._transition(serial, states, WorkflowState.DONE)

        modification_logger.log_completed(
            serial, vehicle_id, outcome.status, (time.time() - start_time) * 1000
        )
        return outcome

    async def _run_vehicle_phase(self,
                                 request: ModificationRequest,
                                 user: ActingUser,
                                 states: List[WorkflowState],
                                 committed: Dict[str, Any]) -> None:
        vehicle = request.vehicle
        serial = vehicle.serial

        async with self.unit_of_work_factory() as uow:
            self._transition(serial, states, WorkflowState.LOOKUPS_RESOLVING)
            lookups = await LookupResolver(uow.catalogs).resolve(vehicle.catalog_labels())

            self._transition(serial, states, WorkflowState.CATEGORY_RESOLVING)
            category = await CategoryResolver(uow.categories).resolve(
                vehicle.vehicular_key, vehicle.make, vehicle.submodel, vehicle.version
            )

            self._transition(serial, states, WorkflowState.VEHICLE_UPDATING)
            catalog_ids = VehicleCatalogIds.merge(lookups, category)
            vehicle_id = await VehicleRecordUpdater(uow.vehicles).update(vehicle, catalog_ids)

            self._transition(serial, states, WorkflowState.AUDIT_WRITING)
            await AuditLogger(uow.audit).record_modification(vehicle_id, serial, user)

            await uow.commit()
            committed.update(vehicle_id=vehicle_id, lookups=lookups, catalog_ids=catalog_ids)
            self._transition(serial, states, WorkflowState.VEHICLE_COMMITTED)

    async def _run_insurance_phase(self, request: ModificationRequest) -> Optional[str]:
        """Upsert the policy; returns the failure message instead of raising."""
        try:
            await asyncio.wait_for(
                self.insurance_upserter.upsert(request.insurance),
                timeout=self.insurance_timeout,
            )
        except InsuranceUpsertError as e:
            return e.message
        except asyncio.TimeoutError:
            return f"Insurance update exceeded {self.insurance_timeout}s"
        return None

    async def _resolve_acting_user(self, user: ActingUser) -> ActingUser:
        if user.needs_resolution and self.acting_user_repository is not None:
            try:
                user = user.merge(await self.acting_user_repository.find(user.user_id))
            except TransactionError as e:
                logger.warning("Acting user lookup failed, using defaults",
                               user_id=user.user_id,
                               error=e.message)
        return user.with_defaults()

    @staticmethod
    def _transition(serial: str, states: List[WorkflowState], state: WorkflowState) -> None:
        states.append(state)
        modification_logger.log_transition(serial, state.value)

    def _abort(self, serial: str, states: List[WorkflowState], error: str) -> None:
        failed_in = states[-1]
        self._transition(serial, states, WorkflowState.ABORTED)
        modification_logger.log_aborted(serial, failed_in.value, error)

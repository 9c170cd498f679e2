"""Error taxonomy of the vehicle registry domain."""

from typing import Any, Dict, List, Optional


class VehicleRegistryError(Exception):
    """Base error. ``status_code`` is the HTTP status the API layer reports."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(VehicleRegistryError):
    """Required field missing or malformed. Raised before any database call."""

    status_code = 400
    code = "validation_error"

    def __init__(self, errors: List[str]):
        super().__init__("Invalid modification request", {"errors": errors})
        self.errors = errors


class NotFoundError(VehicleRegistryError):
    status_code = 404
    code = "not_found"


class LookupCreationError(VehicleRegistryError):
    """A catalog find-or-create step failed."""

    code = "lookup_creation_error"


class TransactionError(VehicleRegistryError):
    """Begin, commit, rollback or a statement failed at the infrastructure level."""

    code = "transaction_error"


class InsuranceUpsertError(VehicleRegistryError):
    """The insurance write failed after the vehicle side was committed."""

    status_code = 502
    code = "insurance_upsert_error"


class WorkflowTimeoutError(VehicleRegistryError):
    status_code = 504
    code = "timeout"

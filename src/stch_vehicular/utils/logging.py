import logging
import sys
from typing import List, Optional
import structlog

from ..config.settings import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Setup structured logging configuration."""
    settings = settings or get_settings()

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO)
    )

    # Configure structlog
    if settings.log_format.lower() == "json":
        processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False)
        ]
    else:
        processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer()
        ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class RequestLogger:
    """Logger for HTTP requests with structured context."""

    def __init__(self):
        self.logger = structlog.get_logger("stch.request")

    def log_request(self,
                    method: str,
                    path: str,
                    request_id: str,
                    ip_address: str = None) -> None:
        """Log incoming HTTP request."""
        self.logger.info(
            "HTTP request received",
            method=method,
            path=path,
            request_id=request_id,
            ip_address=ip_address
        )

    def log_response(self,
                     method: str,
                     path: str,
                     request_id: str,
                     status_code: int,
                     processing_time_ms: float) -> None:
        """Log HTTP response."""
        self.logger.info(
            "HTTP response sent",
            method=method,
            path=path,
            request_id=request_id,
            status_code=status_code,
            processing_time_ms=processing_time_ms
        )


class ModificationLogger:
    """Logger for the vehicle/insurance modification workflow."""

    def __init__(self):
        self.logger = structlog.get_logger("stch.modification")

    def log_start(self, serial: str, concession_id: int, user_id: int) -> None:
        self.logger.info(
            "Vehicle modification started",
            serial=serial,
            concession_id=concession_id,
            user_id=user_id
        )

    def log_transition(self, serial: str, state: str) -> None:
        self.logger.debug(
            "Modification state changed",
            serial=serial,
            state=state
        )

    def log_catalog_created(self, catalog: str, label: str, entry_id: int) -> None:
        self.logger.info(
            "Catalog entry created",
            catalog=catalog,
            label=label,
            entry_id=entry_id
        )

    def log_vehicle_committed(self,
                              serial: str,
                              vehicle_id: int,
                              created_entries: List[str],
                              processing_time_ms: float) -> None:
        self.logger.info(
            "Vehicle modification committed",
            serial=serial,
            vehicle_id=vehicle_id,
            created_entries=created_entries,
            processing_time_ms=processing_time_ms
        )

    def log_aborted(self, serial: str, state: str, error: str) -> None:
        self.logger.error(
            "Vehicle modification aborted",
            serial=serial,
            state=state,
            error=error
        )

    def log_insurance_failed(self, serial: str, concession_id: int, error: str) -> None:
        self.logger.warning(
            "Insurance upsert failed after vehicle commit",
            serial=serial,
            concession_id=concession_id,
            error=error
        )

    def log_completed(self, serial: str, vehicle_id: int, status: str,
                      processing_time_ms: float) -> None:
        self.logger.info(
            "Vehicle modification completed",
            serial=serial,
            vehicle_id=vehicle_id,
            status=status,
            processing_time_ms=processing_time_ms
        )


# Global logger instances
request_logger = RequestLogger()
modification_logger = ModificationLogger()

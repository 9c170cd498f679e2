"""Dependency injection container for the vehicle registry service."""

from typing import Any, Dict, Optional
import structlog

# Domain layer
from ..domain.services.insurance_upserter import InsuranceUpserter

# Application layer
from ..application.use_cases.modify_vehicle_and_insurance import ModifyVehicleAndInsuranceUseCase
from ..application.use_cases.vehicle_queries import VehicleQueryUseCase

# Infrastructure layer
from ..db.session import DatabaseManager
from .catalog_cache import StatusCatalogCache
from .repositories import (
    SqlActingUserRepository,
    SqlInsuranceRepository,
    SqlStatusRepository,
    SqlVehicleQueryRepository,
)
from .unit_of_work import SqlVehicleUnitOfWork

# Configuration
from ..config.settings import Settings, get_settings

logger = structlog.get_logger()


class DIContainer:
    """Dependency injection container implementing the service locator pattern."""

    CRITICAL_SERVICES = (
        'database_manager',
        'status_cache',
        'insurance_repository',
        'acting_user_repository',
        'vehicle_query_repository',
    )

    def __init__(self, settings: Optional[Settings] = None):
        self._services: Dict[str, Any] = {}
        self._singletons: Dict[str, Any] = {}
        self.settings = settings or get_settings()
        self._initialize_services()

    def _initialize_services(self):
        """Initialize all services and their dependencies."""

        logger.info("Initializing dependency injection container")

        # Infrastructure (singletons)
        self._register_singleton('database_manager', lambda: DatabaseManager(self.settings))
        self._register_singleton('status_cache', self._create_status_cache)

        # Repositories (singletons; they open their own sessions)
        self._register_singleton('insurance_repository',
                                 lambda: SqlInsuranceRepository(self._db.concession_sessions))
        self._register_singleton('acting_user_repository',
                                 lambda: SqlActingUserRepository(self._db.users_sessions))
        self._register_singleton('vehicle_query_repository',
                                 lambda: SqlVehicleQueryRepository(self._db.vehicle_sessions))
        self._register_singleton('status_repository',
                                 lambda: SqlStatusRepository(self._db.vehicle_sessions))

        # Domain services (singletons)
        self._register_singleton('insurance_upserter',
                                 lambda: InsuranceUpserter(self.get('insurance_repository')))

        # Use cases (transient - new instance each time)
        self._register_transient('modify_vehicle_use_case', self._create_modify_vehicle_use_case)
        self._register_transient('vehicle_query_use_case', self._create_vehicle_query_use_case)

        logger.info("Dependency injection container initialized successfully")

    def _register_singleton(self, service_name: str, factory_func):
        self._services[service_name] = ('singleton', factory_func)

    def _register_transient(self, service_name: str, factory_func):
        self._services[service_name] = ('transient', factory_func)

    def register_instance(self, service_name: str, instance: Any):
        """Replace a service with a ready-made instance."""
        self._services[service_name] = ('singleton', lambda: instance)
        self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """Get a service instance."""

        if service_name not in self._services:
            raise ValueError(f"Service '{service_name}' not registered")

        service_type, factory_func = self._services[service_name]

        if service_type == 'singleton':
            if service_name not in self._singletons:
                logger.debug("Creating singleton service", service_name=service_name)
                self._singletons[service_name] = factory_func()
            return self._singletons[service_name]

        logger.debug("Creating transient service", service_name=service_name)
        return factory_func()

    @property
    def _db(self) -> DatabaseManager:
        return self.get('database_manager')

    def _create_status_cache(self) -> StatusCatalogCache:
        return StatusCatalogCache(
            self.get('status_repository'),
            ttl_seconds=self.settings.status_cache_ttl_seconds,
        )

    def unit_of_work(self) -> SqlVehicleUnitOfWork:
        """A fresh vehicle-database unit of work."""
        return SqlVehicleUnitOfWork(self._db.vehicle_sessions)

    def _create_modify_vehicle_use_case(self) -> ModifyVehicleAndInsuranceUseCase:
        return ModifyVehicleAndInsuranceUseCase(
            unit_of_work_factory=self.unit_of_work,
            insurance_upserter=self.get('insurance_upserter'),
            acting_user_repository=self.get('acting_user_repository'),
            modification_timeout=self.settings.modification_timeout_seconds,
            insurance_timeout=self.settings.insurance_timeout_seconds,
        )

    def _create_vehicle_query_use_case(self) -> VehicleQueryUseCase:
        return VehicleQueryUseCase(
            vehicle_query_repository=self.get('vehicle_query_repository'),
            insurance_repository=self.get('insurance_repository'),
            status_cache=self.get('status_cache'),
        )

    async def health_check(self) -> Dict[str, Any]:
        """Check container services and database connectivity."""

        health_status = {
            'container_status': 'healthy',
            'services': {},
            'databases': {},
            'errors': []
        }

        for service_name in self.CRITICAL_SERVICES:
            try:
                service = self.get(service_name)
                health_status['services'][service_name] = {
                    'status': 'healthy',
                    'type': type(service).__name__
                }
            except Exception as e:
                health_status['services'][service_name] = {
                    'status': 'unhealthy',
                    'error': str(e)
                }
                health_status['errors'].append(f"{service_name}: {str(e)}")

        if 'database_manager' in self._singletons:
            databases = await self._db.ping()
            health_status['databases'] = databases
            health_status['errors'].extend(
                f"database {name} unreachable" for name, ok in databases.items() if not ok
            )

        health_status['status_cache'] = self.get('status_cache').get_stats()

        if health_status['errors']:
            health_status['container_status'] = 'degraded'

        return health_status

    async def warm_up(self):
        """Create critical singletons and load the status catalog."""

        logger.info("Warming up DI container services")

        for service_name in self.CRITICAL_SERVICES:
            try:
                self.get(service_name)
                logger.debug("Service warmed up", service_name=service_name)
            except Exception as e:
                logger.error("Failed to warm up service",
                             service_name=service_name,
                             error=str(e))

        await self.get('status_cache').refresh()

        logger.info("DI container warm-up completed")

    async def shutdown(self):
        if 'database_manager' in self._singletons:
            await self._db.dispose()

    def reset(self):
        """Reset the container (clear singletons)."""

        logger.warning("Resetting DI container - clearing all singleton instances")

        self._singletons.clear()
        self._initialize_services()


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get the global DI container instance."""
    global _container

    if _container is None:
        _container = DIContainer()

    return _container


def reset_container():
    """Reset the global DI container."""
    global _container

    if _container is not None:
        _container.reset()
    else:
        _container = DIContainer()

import pytest

from stch_vehicular.db import EstatusVehiculo
from stch_vehicular.domain.errors import NotFoundError, TransactionError, ValidationError
from stch_vehicular.domain.interfaces import IStatusRepository
from stch_vehicular.domain.value_objects.vehicle_search import (
    SearchByEngineNumber,
    SearchByPlate,
    SearchBySerial,
    build_vehicle_search,
)
from stch_vehicular.infrastructure.catalog_cache import StatusCatalogCache

from conftest import CONCESSION_ID, VEHICLE_ID, make_request


class FakeClock:

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class CountingStatusRepository(IStatusRepository):

    def __init__(self, labels):
        self.labels = labels
        self.loads = 0
        self.fail = False

    async def load_all(self):
        self.loads += 1
        if self.fail:
            raise TransactionError("Status catalog read failed")
        return dict(self.labels)


class TestBuildVehicleSearch:

    def test_plate_takes_precedence(self):
        assert build_vehicle_search("A123BCD", "NIV12345", "MTR001") == SearchByPlate("A123BCD")

    def test_serial_before_engine_number(self):
        assert build_vehicle_search(None, " NIV12345 ", "MTR001") == SearchBySerial("NIV12345")

    def test_engine_number_alone(self):
        assert build_vehicle_search("", None, "MTR001") == SearchByEngineNumber("MTR001")

    def test_no_filter_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            build_vehicle_search(None, "  ", None)


class TestStatusCatalogCache:

    @pytest.fixture
    def repository(self):
        return CountingStatusRepository({1: "Activo", 2: "Baja"})

    @pytest.fixture
    def clock(self):
        return FakeClock()

    async def test_loads_lazily_and_maps_labels(self, repository, clock):
        cache = StatusCatalogCache(repository, ttl_seconds=60, clock=clock)

        assert await cache.map_value(1) == "Activo"
        assert await cache.map_value(2) == "Baja"
        assert repository.loads == 1

    async def test_unknown_id_maps_to_itself(self, repository, clock):
        cache = StatusCatalogCache(repository, ttl_seconds=60, clock=clock)

        assert await cache.map_value(5) == 5
        assert await cache.map_value(None) is None

    async def test_reloads_after_ttl(self, repository, clock):
        cache = StatusCatalogCache(repository, ttl_seconds=60, clock=clock)
        await cache.get_labels()

        repository.labels[3] = "Suspendido"
        clock.now = 59
        assert await cache.map_value(3) == 3

        clock.now = 60
        assert await cache.map_value(3) == "Suspendido"
        assert repository.loads == 2

    async def test_invalidate_forces_reload(self, repository, clock):
        cache = StatusCatalogCache(repository, ttl_seconds=60, clock=clock)
        await cache.get_labels()

        cache.invalidate()
        await cache.get_labels()

        assert repository.loads == 2

    async def test_failed_refresh_keeps_previous_labels(self, repository, clock):
        cache = StatusCatalogCache(repository, ttl_seconds=60, clock=clock)
        assert await cache.refresh() is True

        repository.fail = True
        assert await cache.refresh() is False
        clock.now = 120
        assert await cache.map_value(1) == "Activo"


class TestVehicleQueryUseCase:

    @pytest.fixture
    def queries(self, container):
        return container.get('vehicle_query_use_case')

    async def test_get_vehicle_maps_status_label(self, queries):
        record = await queries.get_vehicle(VEHICLE_ID)

        assert record.serial == "NIV12345"
        assert record.status_id == 1
        assert record.status == "Activo"

    async def test_status_without_catalog_entry_keeps_id(self, queries):
        record = await queries.get_vehicle(101)

        assert record.status == "5"

    async def test_get_unknown_vehicle(self, queries):
        with pytest.raises(NotFoundError):
            await queries.get_vehicle(9999)

    @pytest.mark.parametrize("filters", [
        {"plate": "A123BCD"},
        {"plate": "Z999ZZZ"},
        {"serial": "NIV12345"},
        {"engine_number": "MTR001"},
    ])
    async def test_search_variants(self, queries, filters):
        (record,) = await queries.search_vehicles(**filters)

        assert record.vehicle_id == VEHICLE_ID

    async def test_search_without_match(self, queries):
        with pytest.raises(NotFoundError):
            await queries.search_vehicles(serial="NOPE")

    async def test_status_cache_refresh_sees_new_entries(self, queries, container, db):
        assert (await queries.get_vehicle(101)).status == "5"

        async with db.vehicle_sessions() as session:
            session.add(EstatusVehiculo(id=5, descripcion="Revisión"))
            await session.commit()

        container.get('status_cache').invalidate()
        assert (await queries.get_vehicle(101)).status == "Revisión"

    async def test_get_insurance_after_modification(self, queries, container):
        with pytest.raises(NotFoundError):
            await queries.get_insurance(CONCESSION_ID)

        await container.get('modify_vehicle_use_case').execute(make_request())

        policy = await queries.get_insurance(CONCESSION_ID)
        assert policy.insurer_name == "Seguros Hidalgo"
        assert policy.updated_at is not None

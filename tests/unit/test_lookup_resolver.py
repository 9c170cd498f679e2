import pytest

from stch_vehicular.db import ClaseVehiculo, Color, TipoVehiculo
from stch_vehicular.domain.errors import LookupCreationError
from stch_vehicular.domain.services.lookup_resolver import ICatalogRepository, LookupResolver
from stch_vehicular.domain.value_objects.catalog import CatalogKind, CatalogLabels, CatalogMatch
from stch_vehicular.infrastructure.repositories.catalog_repository import SqlCatalogRepository
from stch_vehicular.infrastructure.unit_of_work import SqlVehicleUnitOfWork

from conftest import AUTOMOVIL_ID, AZUL_ID, MOTOCICLETA_ID, count_rows


class InMemoryCatalogRepository(ICatalogRepository):
    """Dictionary-backed catalogs for resolver unit tests."""

    def __init__(self):
        self.rows = {}
        self.next_id = 1

    async def find_id(self, kind, label, parent_id=None):
        return self.rows.get((kind, label, parent_id))

    async def find_or_create(self, kind, label, parent_id=None):
        existing = await self.find_id(kind, label, parent_id)
        if existing is not None:
            return CatalogMatch(existing)
        self.rows[(kind, label, parent_id)] = self.next_id
        self.next_id += 1
        return CatalogMatch(self.rows[(kind, label, parent_id)], created=True)


class TestLookupResolver:

    @pytest.fixture
    def repository(self):
        return InMemoryCatalogRepository()

    async def test_creates_missing_entries_with_warnings(self, repository):
        resolver = LookupResolver(repository)

        result = await resolver.resolve(CatalogLabels(
            vehicle_class="Automóvil", vehicle_type="Sedán", make="Nissan", submodel="Versa"
        ))

        assert result.class_id is not None
        assert result.type_id is not None
        assert result.created == ["clase:Automóvil", "tipo:Sedán", "marca:Nissan", "submarca:Versa"]
        assert any("created new entry 'Sedán'" in w for w in result.warnings)

    async def test_blank_optional_labels_resolve_to_none(self, repository):
        resolver = LookupResolver(repository)

        result = await resolver.resolve(CatalogLabels(
            vehicle_class="Automóvil", vehicle_type="Sedán", color="   ", fuel=None
        ))

        assert result.color_id is None
        assert result.fuel_id is None
        assert "color: no value supplied" in result.warnings
        assert "combustible: no value supplied" in result.warnings
        assert (CatalogKind.COLOR, "   ", None) not in repository.rows

    async def test_type_without_class_is_not_resolved(self, repository):
        resolver = LookupResolver(repository)

        result = await resolver.resolve(CatalogLabels(vehicle_type="Sedán"))

        assert result.class_id is None
        assert result.type_id is None
        assert "tipo: cannot resolve without a class" in result.warnings
        assert not any(key[0] is CatalogKind.TYPE for key in repository.rows)


class TestSqlCatalogRepository:

    async def test_lookup_is_idempotent(self, db):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            first = await uow.catalogs.find_or_create(CatalogKind.COLOR, "Turquesa")
            second = await uow.catalogs.find_or_create(CatalogKind.COLOR, "Turquesa")
            await uow.commit()

        assert first.created is True
        assert second.created is False
        assert first.id == second.id
        assert await count_rows(db.vehicle_sessions, Color, Color.descripcion == "Turquesa") == 1

    async def test_existing_label_is_reused(self, db):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            match = await uow.catalogs.find_or_create(CatalogKind.COLOR, "Azul")

        assert match == CatalogMatch(AZUL_ID)

    async def test_matching_is_exact(self, db):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            match = await uow.catalogs.find_or_create(CatalogKind.COLOR, "azul")
            await uow.commit()

        assert match.created is True
        assert match.id != AZUL_ID

    async def test_type_is_scoped_by_class(self, db):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            resolver = LookupResolver(uow.catalogs)
            car = await resolver.resolve(CatalogLabels(vehicle_class="Automóvil", vehicle_type="Sedan"))
            bike = await resolver.resolve(CatalogLabels(vehicle_class="Motocicleta", vehicle_type="Sedan"))
            await uow.commit()

        assert car.class_id == AUTOMOVIL_ID
        assert bike.class_id == MOTOCICLETA_ID
        assert car.type_id != bike.type_id
        assert await count_rows(db.vehicle_sessions, TipoVehiculo, TipoVehiculo.descripcion == "Sedan") == 2

    async def test_insert_conflict_rereads_existing_row(self, db, monkeypatch):
        # Another writer committed "Turquesa" after our lookup saw nothing
        async with db.vehicle_sessions() as session:
            session.add(Color(descripcion="Turquesa"))
            await session.commit()

        real_find_id = SqlCatalogRepository.find_id
        calls = []

        async def stale_find_id(self, kind, label, parent_id=None):
            calls.append(label)
            if len(calls) == 1:
                return None
            return await real_find_id(self, kind, label, parent_id)

        monkeypatch.setattr(SqlCatalogRepository, "find_id", stale_find_id)

        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            turquesa = await uow.catalogs.find_or_create(CatalogKind.COLOR, "Turquesa")
            # the enclosing transaction survives the failed insert
            verde = await uow.catalogs.find_or_create(CatalogKind.COLOR, "Verde")
            await uow.commit()

        assert turquesa.created is False
        assert verde.created is True
        assert await count_rows(db.vehicle_sessions, Color, Color.descripcion == "Turquesa") == 1
        assert await count_rows(db.vehicle_sessions, Color, Color.descripcion == "Verde") == 1

    async def test_two_units_of_work_converge_on_one_row(self, db, monkeypatch):
        real_find_id = SqlCatalogRepository.find_id
        stale_reads = {"Turquesa"}

        async def find_id_missing_once(self, kind, label, parent_id=None):
            # SQLite cannot keep a read snapshot open across another writer's
            # commit; the late writer's miss is replayed instead
            if self.session is late.session and label in stale_reads:
                stale_reads.discard(label)
                return None
            return await real_find_id(self, kind, label, parent_id)

        monkeypatch.setattr(SqlCatalogRepository, "find_id", find_id_missing_once)

        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as late:
            async with SqlVehicleUnitOfWork(db.vehicle_sessions) as early:
                winner = await early.catalogs.find_or_create(CatalogKind.COLOR, "Turquesa")
                await early.commit()

            loser = await late.catalogs.find_or_create(CatalogKind.COLOR, "Turquesa")
            await late.commit()

        assert winner.created is True
        assert loser.created is False
        assert loser.id == winner.id
        assert not stale_reads
        assert await count_rows(db.vehicle_sessions, Color, Color.descripcion == "Turquesa") == 1

    async def test_failed_insert_raises_lookup_creation_error(self, db):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            with pytest.raises(LookupCreationError) as exc_info:
                await uow.catalogs.find_or_create(CatalogKind.TYPE, "Sedán", parent_id=999)

        assert exc_info.value.details == {"catalog": "tipo", "label": "Sedán"}

    async def test_uncommitted_entries_are_rolled_back(self, db):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            await uow.catalogs.find_or_create(CatalogKind.CLASS, "Autobús")

        assert await count_rows(
            db.vehicle_sessions, ClaseVehiculo, ClaseVehiculo.descripcion == "Autobús"
        ) == 0

import pytest

from stch_vehicular.domain.entities.vehicle_modification import (
    CategoryResolution,
    ResolvedLookups,
    VehicleCatalogIds,
)
from stch_vehicular.domain.services.category_resolver import CategoryResolver
from stch_vehicular.infrastructure.unit_of_work import SqlVehicleUnitOfWork

from conftest import NISSAN_ID, TAXI_CATEGORY_ID, VERSA_ID


class TestCategoryResolver:

    @pytest.mark.parametrize("make, submodel, version, expected_category", [
        ("Nissan", "Versa", "Advance", TAXI_CATEGORY_ID),
        ("Dina", "Tsuru", "Sense", 1),
        # make and submodel only agree on the third mapping row
        ("Nissan", "Tsuru", None, 2),
        # nothing matches: lowest mapping id wins
        ("Ford", "Ka", "Base", 1),
    ])
    async def test_best_match_ranking(self, db, make, submodel, version, expected_category):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            resolution = await CategoryResolver(uow.categories).resolve(
                "0010203", make, submodel, version
            )

        assert resolution.category_id == expected_category

    async def test_match_returns_catalog_ids(self, db):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            resolution = await CategoryResolver(uow.categories).resolve(
                "0010203", "Nissan", "Versa", "Advance"
            )

        assert resolution == CategoryResolution(
            category_id=TAXI_CATEGORY_ID, make_id=NISSAN_ID, submodel_id=VERSA_ID, version_id=1,
            make_label="Nissan", submodel_label="Versa", version_label="Advance",
        )

    @pytest.mark.parametrize("key", ["9999999", None, "  "])
    async def test_unmatched_key_soft_fails_to_zero(self, db, key):
        async with SqlVehicleUnitOfWork(db.vehicle_sessions) as uow:
            resolution = await CategoryResolver(uow.categories).resolve(key, "Nissan", "Versa")

        assert resolution == CategoryResolution()
        assert resolution.category_id == 0
        assert not resolution.is_classified


class TestVehicleCatalogIds:

    def test_category_ids_take_precedence(self):
        lookups = ResolvedLookups(class_id=1, type_id=2, make_id=10, submodel_id=20, color_id=7)
        category = CategoryResolution(category_id=3, make_id=11, submodel_id=21, version_id=5)

        ids = VehicleCatalogIds.merge(lookups, category)

        assert ids.make_id == 11
        assert ids.submodel_id == 21
        assert ids.version_id == 5
        assert ids.category_id == 3
        assert ids.color_id == 7

    def test_lookup_ids_kept_when_category_has_none(self):
        lookups = ResolvedLookups(make_id=10, submodel_id=20)

        ids = VehicleCatalogIds.merge(lookups, CategoryResolution())

        assert ids.make_id == 10
        assert ids.submodel_id == 20
        assert ids.version_id is None
        assert ids.category_id == 0

    def test_category_labels_travel_with_their_ids(self):
        lookups = ResolvedLookups(make_id=10, submodel_id=20)
        category = CategoryResolution(category_id=2, make_id=1, submodel_id=2,
                                      make_label="Nissan", submodel_label="Tsuru")

        ids = VehicleCatalogIds.merge(lookups, category)

        assert (ids.make_id, ids.make_label) == (1, "Nissan")
        assert (ids.submodel_id, ids.submodel_label) == (2, "Tsuru")
        assert (ids.version_id, ids.version_label) == (None, None)

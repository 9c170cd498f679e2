"""Lookup resolution domain service."""

from abc import ABC, abstractmethod
from typing import List, Optional
import structlog

from ..entities.vehicle_modification import ResolvedLookups
from ..value_objects.catalog import CatalogKind, CatalogLabels, CatalogMatch

logger = structlog.get_logger()


class ICatalogRepository(ABC):
    """Interface for catalog find-or-create access."""

    @abstractmethod
    async def find_id(self, kind: CatalogKind, label: str,
                      parent_id: Optional[int] = None) -> Optional[int]:
        """Return the id of the entry with exactly ``label``, if any."""
        pass

    @abstractmethod
    async def find_or_create(self, kind: CatalogKind, label: str,
                             parent_id: Optional[int] = None) -> CatalogMatch:
        """
        Return the id for ``label``, inserting a new entry when absent.

        Concurrent inserts of the same label must converge on a single row.
        """
        pass


class LookupResolver:
    """Domain service turning free-text catalog labels into catalog ids."""

    # (field on CatalogLabels, catalog kind, field on ResolvedLookups)
    FLAT_CATALOGS = (
        ("use", CatalogKind.USE, "use_id"),
        ("color", CatalogKind.COLOR, "color_id"),
        ("fuel", CatalogKind.FUEL, "fuel_id"),
        ("make", CatalogKind.MAKE, "make_id"),
        ("submodel", CatalogKind.SUBMODEL, "submodel_id"),
        ("origin", CatalogKind.ORIGIN, "origin_id"),
        ("plate_type", CatalogKind.PLATE_TYPE, "plate_type_id"),
    )

    def __init__(self, catalog_repository: ICatalogRepository):
        self.catalog_repository = catalog_repository

    async def resolve(self, labels: CatalogLabels) -> ResolvedLookups:
        """
        Resolve every catalog label of a modification.

        Class is resolved first because Type is scoped by it. Blank labels
        resolve to ``None`` with a warning instead of failing; a catalog
        failure propagates as ``LookupCreationError``.

        Args:
            labels: Free-text catalog labels

        Returns:
            ResolvedLookups with ids, created entries and warnings
        """
        created: List[str] = []
        warnings: List[str] = []
        ids = {}

        ids["class_id"] = await self._resolve_one(
            CatalogKind.CLASS, labels.vehicle_class, None, created, warnings
        )

        if ids["class_id"] is None:
            if self._present(labels.vehicle_type):
                warnings.append(f"{CatalogKind.TYPE.value}: cannot resolve without a class")
            ids["type_id"] = None
        else:
            ids["type_id"] = await self._resolve_one(
                CatalogKind.TYPE, labels.vehicle_type, ids["class_id"], created, warnings
            )

        for field_name, kind, target in self.FLAT_CATALOGS:
            ids[target] = await self._resolve_one(
                kind, getattr(labels, field_name), None, created, warnings
            )

        logger.debug("Lookups resolved", created=len(created), warnings=len(warnings))

        return ResolvedLookups(created=created, warnings=warnings, **ids)

    async def _resolve_one(self,
                           kind: CatalogKind,
                           label: Optional[str],
                           parent_id: Optional[int],
                           created: List[str],
                           warnings: List[str]) -> Optional[int]:
        if not self._present(label):
            warnings.append(f"{kind.value}: no value supplied")
            return None

        match = await self.catalog_repository.find_or_create(kind, label, parent_id)
        if match.created:
            created.append(f"{kind.value}:{label}")
            warnings.append(f"{kind.value}: created new entry '{label}' (id={match.id})")
        return match.id

    @staticmethod
    def _present(label: Optional[str]) -> bool:
        return label is not None and label.strip() != ""

"""Category resolution domain service."""

from abc import ABC, abstractmethod
from typing import Optional
import structlog

from ..entities.vehicle_modification import CategoryResolution

logger = structlog.get_logger()


class ICategoryRepository(ABC):
    """Interface for the classification-key mapping."""

    @abstractmethod
    async def find_best(self,
                        vehicular_key: str,
                        make: Optional[str] = None,
                        submodel: Optional[str] = None,
                        version: Optional[str] = None) -> Optional[CategoryResolution]:
        """
        Return the best mapping row for ``vehicular_key``.

        Rows are ranked by label agreement: version 4, submodel 2, make 1;
        ties go to the lowest row id.
        """
        pass


class CategoryResolver:
    """Domain service resolving category, make, submodel and version ids."""

    def __init__(self, category_repository: ICategoryRepository):
        self.category_repository = category_repository

    async def resolve(self,
                      vehicular_key: Optional[str],
                      make: Optional[str] = None,
                      submodel: Optional[str] = None,
                      version: Optional[str] = None) -> CategoryResolution:
        """Resolve the category; an unmatched key yields category 0, never an error."""
        if not vehicular_key or not vehicular_key.strip():
            logger.debug("No vehicular key, category left unclassified")
            return CategoryResolution()

        resolution = await self.category_repository.find_best(
            vehicular_key.strip(), make, submodel, version
        )

        if resolution is None:
            logger.info("Vehicular key has no category mapping", vehicular_key=vehicular_key)
            return CategoryResolution()

        return resolution

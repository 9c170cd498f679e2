"""Vehicle status catalog caching."""

import asyncio
import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional
import structlog

from ..domain.errors import VehicleRegistryError
from ..domain.interfaces import IStatusRepository

logger = structlog.get_logger()


class StatusCatalogCache:
    """In-memory id -> label map of vehicle statuses with a time-to-live."""

    def __init__(self,
                 status_repository: IStatusRepository,
                 ttl_seconds: int = 3600,
                 clock: Callable[[], float] = time.monotonic):
        self.status_repository = status_repository
        self.ttl_seconds = ttl_seconds
        self._clock = clock

        self._labels: Dict[int, str] = {}
        self._loaded_at: Optional[float] = None
        self._last_refresh: Optional[datetime] = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._loaded_at is not None

    @property
    def is_stale(self) -> bool:
        if self._loaded_at is None:
            return True
        return self._clock() - self._loaded_at >= self.ttl_seconds

    async def refresh(self) -> bool:
        """Reload from the database. On failure the previous map is kept."""
        async with self._lock:
            return await self._refresh_locked()

    async def _refresh_locked(self) -> bool:
        start_time = time.time()
        try:
            labels = await self.status_repository.load_all()
        except VehicleRegistryError as e:
            logger.warning("Status catalog refresh failed", error=e.message)
            return False

        self._labels = labels
        self._loaded_at = self._clock()
        self._last_refresh = datetime.now()

        logger.info("Status catalog cache refreshed",
                    entries=len(labels),
                    refresh_time_ms=(time.time() - start_time) * 1000)
        return True

    def invalidate(self) -> None:
        self._loaded_at = None

    async def get_labels(self) -> Dict[int, str]:
        if self.is_stale:
            async with self._lock:
                # another caller may have refreshed while we waited
                if self.is_stale:
                    await self._refresh_locked()
        return dict(self._labels)

    async def map_value(self, status_id: Optional[int]) -> Any:
        """Label for ``status_id``; the raw id when it is not in the catalog."""
        if status_id is None:
            return None
        labels = await self.get_labels()
        return labels.get(status_id, status_id)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "loaded": self.is_loaded,
            "entries": len(self._labels),
            "ttl_seconds": self.ttl_seconds,
            "last_refresh": self._last_refresh.isoformat() if self._last_refresh else None,
        }

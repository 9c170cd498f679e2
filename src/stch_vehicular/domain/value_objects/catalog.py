"""Catalog value objects."""

import enum
from dataclasses import dataclass


class CatalogKind(str, enum.Enum):
    """Catalogs the lookup resolver finds or creates by label."""

    CLASS = "clase"
    TYPE = "tipo"          # scoped by CLASS
    USE = "uso"
    COLOR = "color"
    FUEL = "combustible"
    MAKE = "marca"
    SUBMODEL = "submarca"
    ORIGIN = "origen"
    PLATE_TYPE = "tipo_placa"


@dataclass(frozen=True)
class CatalogMatch:
    """Outcome of a find-or-create against one catalog."""

    id: int
    created: bool = False


@dataclass(frozen=True)
class CatalogLabels:
    """Free-text labels the lookup resolver turns into catalog ids."""

    vehicle_class: str | None = None
    vehicle_type: str | None = None
    use: str | None = None
    color: str | None = None
    fuel: str | None = None
    make: str | None = None
    submodel: str | None = None
    origin: str | None = None
    plate_type: str | None = None

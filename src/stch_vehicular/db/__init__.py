"""
Database package for the STCH vehicular service.

Provides SQLAlchemy models for the vehicle, concessions and users databases
and their async session management.
"""

from .base import VehicleBase, ConcessionBase, UsersBase
from .models import (
    # Vehicle catalogs
    ClaseVehiculo,
    TipoVehiculo,
    UsoVehiculo,
    Color,
    Combustible,
    Marca,
    Submarca,
    Version,
    Categoria,
    Origen,
    TipoPlaca,
    EstatusVehiculo,
    ClaveVehicularCategoria,
    # Vehicle records
    Vehiculo,
    BitacoraVehiculo,
    # Concessions
    Concesion,
    Aseguradora,
    # Users
    UsuarioPerfil,
)
from .session import DatabaseManager

__all__ = [
    # Bases
    "VehicleBase",
    "ConcessionBase",
    "UsersBase",
    # Models
    "ClaseVehiculo",
    "TipoVehiculo",
    "UsoVehiculo",
    "Color",
    "Combustible",
    "Marca",
    "Submarca",
    "Version",
    "Categoria",
    "Origen",
    "TipoPlaca",
    "EstatusVehiculo",
    "ClaveVehicularCategoria",
    "Vehiculo",
    "BitacoraVehiculo",
    "Concesion",
    "Aseguradora",
    "UsuarioPerfil",
    # Session
    "DatabaseManager",
]

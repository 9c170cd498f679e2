from sqlalchemy.orm import DeclarativeBase


class VehicleBase(DeclarativeBase):
    """Tables owned by the vehicle control database."""


class ConcessionBase(DeclarativeBase):
    """Tables owned by the concessions database."""


class UsersBase(DeclarativeBase):
    """Tables owned by the users database."""

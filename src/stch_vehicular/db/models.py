from datetime import date, datetime
from sqlalchemy import (
    String, Integer, Date, DateTime, ForeignKey, Text, Index, UniqueConstraint, func
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import VehicleBase, ConcessionBase, UsersBase


# --- vehicle database: catalogs ---
class CatalogMixin:
    """Label → id catalog row. Labels are stored exactly as supplied."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    descripcion: Mapped[str] = mapped_column(String(100), nullable=False)


class ClaseVehiculo(CatalogMixin, VehicleBase):
    __tablename__ = "clase_vehiculo"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_clase_vehiculo_descripcion"),)


class TipoVehiculo(CatalogMixin, VehicleBase):
    __tablename__ = "tipo_vehiculo"

    id_clase: Mapped[int] = mapped_column(ForeignKey("clase_vehiculo.id"), nullable=False, index=True)

    # a type label is unique only within its class
    __table_args__ = (UniqueConstraint("id_clase", "descripcion", name="uq_tipo_vehiculo_clase_descripcion"),)


class UsoVehiculo(CatalogMixin, VehicleBase):
    __tablename__ = "uso_vehiculo"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_uso_vehiculo_descripcion"),)


class Color(CatalogMixin, VehicleBase):
    __tablename__ = "color"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_color_descripcion"),)


class Combustible(CatalogMixin, VehicleBase):
    __tablename__ = "combustible"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_combustible_descripcion"),)


class Marca(CatalogMixin, VehicleBase):
    __tablename__ = "marca"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_marca_descripcion"),)


class Submarca(CatalogMixin, VehicleBase):
    __tablename__ = "submarca"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_submarca_descripcion"),)


class Version(CatalogMixin, VehicleBase):
    __tablename__ = "version"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_version_descripcion"),)


class Categoria(CatalogMixin, VehicleBase):
    __tablename__ = "categoria"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_categoria_descripcion"),)


class Origen(CatalogMixin, VehicleBase):
    __tablename__ = "origen"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_origen_descripcion"),)


class TipoPlaca(CatalogMixin, VehicleBase):
    __tablename__ = "tipo_placa"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_tipo_placa_descripcion"),)


class EstatusVehiculo(CatalogMixin, VehicleBase):
    __tablename__ = "estatus_vehiculo"
    __table_args__ = (UniqueConstraint("descripcion", name="uq_estatus_vehiculo_descripcion"),)


class ClaveVehicularCategoria(VehicleBase):
    """Classification key → category/make/submodel/version mapping."""

    __tablename__ = "clave_vehicular_categoria"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    clave_vehicular: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    id_categoria: Mapped[int] = mapped_column(ForeignKey("categoria.id"), nullable=False)
    id_marca: Mapped[int | None] = mapped_column(ForeignKey("marca.id"), nullable=True)
    id_submarca: Mapped[int | None] = mapped_column(ForeignKey("submarca.id"), nullable=True)
    id_version: Mapped[int | None] = mapped_column(ForeignKey("version.id"), nullable=True)


# --- vehicle database: vehicle and audit ---
class Vehiculo(VehicleBase):
    __tablename__ = "vehiculo"

    id_vehiculo: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    numero_serie: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    id_concesion: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    id_estatus: Mapped[int | None] = mapped_column(Integer, nullable=True)
    modelo: Mapped[int | None] = mapped_column(Integer, nullable=True)  # model year
    numero_pasajeros: Mapped[int | None] = mapped_column(Integer, nullable=True)
    numero_cilindros: Mapped[int | None] = mapped_column(Integer, nullable=True)
    id_clase: Mapped[int | None] = mapped_column(Integer, nullable=True)
    clase: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_tipo: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tipo: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_marca: Mapped[int | None] = mapped_column(Integer, nullable=True)
    marca: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_submarca: Mapped[int | None] = mapped_column(Integer, nullable=True)
    submarca: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_version: Mapped[int | None] = mapped_column(Integer, nullable=True)
    version: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_uso: Mapped[int | None] = mapped_column(Integer, nullable=True)
    uso: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_combustible: Mapped[int | None] = mapped_column(Integer, nullable=True)
    combustible: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_origen: Mapped[int | None] = mapped_column(Integer, nullable=True)
    origen: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_color: Mapped[int | None] = mapped_column(Integer, nullable=True)
    color: Mapped[str | None] = mapped_column(String(100), nullable=True)
    numero_motor: Mapped[str | None] = mapped_column(String(30), nullable=True, index=True)
    numero_puertas: Mapped[int | None] = mapped_column(Integer, nullable=True)
    placa_anterior: Mapped[str | None] = mapped_column(String(15), nullable=True)
    placa_asignada: Mapped[str | None] = mapped_column(String(15), nullable=True, index=True)
    clasificacion_peso: Mapped[str | None] = mapped_column(String(50), nullable=True)
    capacidad: Mapped[str | None] = mapped_column(String(50), nullable=True)
    id_tipo_servicio: Mapped[int | None] = mapped_column(Integer, nullable=True)
    id_tipo_placa: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tipo_placa: Mapped[str | None] = mapped_column(String(100), nullable=True)
    id_categoria: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # 0 = unclassified
    clave_vehicular: Mapped[str | None] = mapped_column(String(20), nullable=True)
    fecha_actualizacion: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class BitacoraVehiculo(VehicleBase):
    """Append-only audit trail of vehicle modifications."""

    __tablename__ = "bitacora_vehiculo"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_vehiculo: Mapped[int] = mapped_column(ForeignKey("vehiculo.id_vehiculo"), nullable=False, index=True)
    numero_serie: Mapped[str] = mapped_column(String(30), nullable=False)
    id_usuario: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    id_perfil: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    id_tarjeta_inteligente: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    id_delegacion: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    id_operacion: Mapped[int] = mapped_column(Integer, nullable=False)
    fecha: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

Index("ix_bitacora_vehiculo_usuario", BitacoraVehiculo.id_usuario, BitacoraVehiculo.fecha)


# --- concessions database ---
class Concesion(ConcessionBase):
    __tablename__ = "concesion"

    id_concesion: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    folio: Mapped[str | None] = mapped_column(String(30), nullable=True, index=True)
    serie_placa_actual: Mapped[str | None] = mapped_column(String(15), nullable=True)
    numero_expediente: Mapped[str | None] = mapped_column(String(30), nullable=True)
    id_concesionario_actual: Mapped[int | None] = mapped_column(Integer, nullable=True)
    id_vehiculo_actual: Mapped[int | None] = mapped_column(Integer, nullable=True)


class Aseguradora(ConcessionBase):
    """Current insurance policy of a concession (latest wins)."""

    __tablename__ = "aseguradora"

    id_aseguradora: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_concesion: Mapped[int] = mapped_column(
        ForeignKey("concesion.id_concesion", ondelete="CASCADE"), nullable=False, unique=True
    )
    nombre_aseguradora: Mapped[str] = mapped_column(String(150), nullable=False)
    numero_poliza: Mapped[str] = mapped_column(String(50), nullable=False)
    fecha_expedicion: Mapped[date] = mapped_column(Date, nullable=False)
    fecha_vencimiento: Mapped[date] = mapped_column(Date, nullable=False)
    folio_pago: Mapped[str | None] = mapped_column(String(50), nullable=True)
    observaciones: Mapped[str | None] = mapped_column(Text, nullable=True)
    fecha_actualizacion: Mapped[datetime] = mapped_column(DateTime, nullable=False)


# --- users database ---
class UsuarioPerfil(UsersBase):
    """Profile, smart-card and delegation assigned to a user."""

    __tablename__ = "usuario_perfil"

    id_usuario: Mapped[int] = mapped_column(Integer, primary_key=True)
    id_perfil: Mapped[int | None] = mapped_column(Integer, nullable=True)
    id_tarjeta_inteligente: Mapped[int | None] = mapped_column(Integer, nullable=True)
    id_delegacion: Mapped[int | None] = mapped_column(Integer, nullable=True)

"""create vehicle catalogs, vehicle and audit tables

Revision ID: v001
Revises: 
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'v001'
down_revision = None
branch_labels = ('vehicle',)
depends_on = None

# label-unique catalogs
CATALOG_TABLES = [
    'clase_vehiculo',
    'uso_vehiculo',
    'color',
    'combustible',
    'marca',
    'submarca',
    'version',
    'categoria',
    'origen',
    'tipo_placa',
    'estatus_vehiculo',
]


def upgrade() -> None:
    for table in CATALOG_TABLES:
        op.create_table(table,
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('descripcion', sa.String(length=100), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('descripcion', name=f'uq_{table}_descripcion')
        )

    # Type labels are unique per class
    op.create_table('tipo_vehiculo',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('descripcion', sa.String(length=100), nullable=False),
        sa.Column('id_clase', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['id_clase'], ['clase_vehiculo.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('id_clase', 'descripcion', name='uq_tipo_vehiculo_clase_descripcion')
    )
    op.create_index(op.f('ix_tipo_vehiculo_id_clase'), 'tipo_vehiculo', ['id_clase'], unique=False)

    op.create_table('clave_vehicular_categoria',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('clave_vehicular', sa.String(length=20), nullable=False),
        sa.Column('id_categoria', sa.Integer(), nullable=False),
        sa.Column('id_marca', sa.Integer(), nullable=True),
        sa.Column('id_submarca', sa.Integer(), nullable=True),
        sa.Column('id_version', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['id_categoria'], ['categoria.id']),
        sa.ForeignKeyConstraint(['id_marca'], ['marca.id']),
        sa.ForeignKeyConstraint(['id_submarca'], ['submarca.id']),
        sa.ForeignKeyConstraint(['id_version'], ['version.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_clave_vehicular_categoria_clave_vehicular'), 'clave_vehicular_categoria',
                    ['clave_vehicular'], unique=False)

    op.create_table('vehiculo',
        sa.Column('id_vehiculo', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('numero_serie', sa.String(length=30), nullable=False),
        sa.Column('id_concesion', sa.Integer(), nullable=True),
        sa.Column('id_estatus', sa.Integer(), nullable=True),
        sa.Column('modelo', sa.Integer(), nullable=True),
        sa.Column('numero_pasajeros', sa.Integer(), nullable=True),
        sa.Column('numero_cilindros', sa.Integer(), nullable=True),
        sa.Column('id_clase', sa.Integer(), nullable=True),
        sa.Column('clase', sa.String(length=100), nullable=True),
        sa.Column('id_tipo', sa.Integer(), nullable=True),
        sa.Column('tipo', sa.String(length=100), nullable=True),
        sa.Column('id_marca', sa.Integer(), nullable=True),
        sa.Column('marca', sa.String(length=100), nullable=True),
        sa.Column('id_submarca', sa.Integer(), nullable=True),
        sa.Column('submarca', sa.String(length=100), nullable=True),
        sa.Column('id_version', sa.Integer(), nullable=True),
        sa.Column('version', sa.String(length=100), nullable=True),
        sa.Column('id_uso', sa.Integer(), nullable=True),
        sa.Column('uso', sa.String(length=100), nullable=True),
        sa.Column('id_combustible', sa.Integer(), nullable=True),
        sa.Column('combustible', sa.String(length=100), nullable=True),
        sa.Column('id_origen', sa.Integer(), nullable=True),
        sa.Column('origen', sa.String(length=100), nullable=True),
        sa.Column('id_color', sa.Integer(), nullable=True),
        sa.Column('color', sa.String(length=100), nullable=True),
        sa.Column('numero_motor', sa.String(length=30), nullable=True),
        sa.Column('numero_puertas', sa.Integer(), nullable=True),
        sa.Column('placa_anterior', sa.String(length=15), nullable=True),
        sa.Column('placa_asignada', sa.String(length=15), nullable=True),
        sa.Column('clasificacion_peso', sa.String(length=50), nullable=True),
        sa.Column('capacidad', sa.String(length=50), nullable=True),
        sa.Column('id_tipo_servicio', sa.Integer(), nullable=True),
        sa.Column('id_tipo_placa', sa.Integer(), nullable=True),
        sa.Column('tipo_placa', sa.String(length=100), nullable=True),
        sa.Column('id_categoria', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('clave_vehicular', sa.String(length=20), nullable=True),
        sa.Column('fecha_actualizacion', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id_vehiculo'),
        sa.UniqueConstraint('numero_serie')
    )
    op.create_index(op.f('ix_vehiculo_id_concesion'), 'vehiculo', ['id_concesion'], unique=False)
    op.create_index(op.f('ix_vehiculo_numero_motor'), 'vehiculo', ['numero_motor'], unique=False)
    op.create_index(op.f('ix_vehiculo_placa_asignada'), 'vehiculo', ['placa_asignada'], unique=False)

    op.create_table('bitacora_vehiculo',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id_vehiculo', sa.Integer(), nullable=False),
        sa.Column('numero_serie', sa.String(length=30), nullable=False),
        sa.Column('id_usuario', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('id_perfil', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('id_tarjeta_inteligente', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('id_delegacion', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('id_operacion', sa.Integer(), nullable=False),
        sa.Column('fecha', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['id_vehiculo'], ['vehiculo.id_vehiculo']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bitacora_vehiculo_id_vehiculo'), 'bitacora_vehiculo', ['id_vehiculo'], unique=False)
    op.create_index('ix_bitacora_vehiculo_usuario', 'bitacora_vehiculo', ['id_usuario', 'fecha'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_bitacora_vehiculo_usuario', table_name='bitacora_vehiculo')
    op.drop_index(op.f('ix_bitacora_vehiculo_id_vehiculo'), table_name='bitacora_vehiculo')
    op.drop_table('bitacora_vehiculo')

    op.drop_index(op.f('ix_vehiculo_placa_asignada'), table_name='vehiculo')
    op.drop_index(op.f('ix_vehiculo_numero_motor'), table_name='vehiculo')
    op.drop_index(op.f('ix_vehiculo_id_concesion'), table_name='vehiculo')
    op.drop_table('vehiculo')

    op.drop_index(op.f('ix_clave_vehicular_categoria_clave_vehicular'), table_name='clave_vehicular_categoria')
    op.drop_table('clave_vehicular_categoria')

    op.drop_index(op.f('ix_tipo_vehiculo_id_clase'), table_name='tipo_vehiculo')
    op.drop_table('tipo_vehiculo')

    for table in reversed(CATALOG_TABLES):
        op.drop_table(table)

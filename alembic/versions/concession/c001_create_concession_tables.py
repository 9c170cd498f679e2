"""create concession and insurance tables

Revision ID: c001
Revises: 
Create Date: 2026-10-18 09:05:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'c001'
down_revision = None
branch_labels = ('concession',)
depends_on = None


def upgrade() -> None:
    op.create_table('concesion',
        sa.Column('id_concesion', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('folio', sa.String(length=30), nullable=True),
        sa.Column('serie_placa_actual', sa.String(length=15), nullable=True),
        sa.Column('numero_expediente', sa.String(length=30), nullable=True),
        sa.Column('id_concesionario_actual', sa.Integer(), nullable=True),
        sa.Column('id_vehiculo_actual', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id_concesion')
    )
    op.create_index(op.f('ix_concesion_folio'), 'concesion', ['folio'], unique=False)

    # One current policy per concession, overwritten in place
    op.create_table('aseguradora',
        sa.Column('id_aseguradora', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id_concesion', sa.Integer(), nullable=False),
        sa.Column('nombre_aseguradora', sa.String(length=150), nullable=False),
        sa.Column('numero_poliza', sa.String(length=50), nullable=False),
        sa.Column('fecha_expedicion', sa.Date(), nullable=False),
        sa.Column('fecha_vencimiento', sa.Date(), nullable=False),
        sa.Column('folio_pago', sa.String(length=50), nullable=True),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.Column('fecha_actualizacion', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_concesion'], ['concesion.id_concesion'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id_aseguradora'),
        sa.UniqueConstraint('id_concesion')
    )


def downgrade() -> None:
    op.drop_table('aseguradora')
    op.drop_index(op.f('ix_concesion_folio'), table_name='concesion')
    op.drop_table('concesion')

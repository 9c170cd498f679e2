"""create user profile assignment table

Revision ID: u001
Revises: 
Create Date: 2026-10-18 09:10:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'u001'
down_revision = None
branch_labels = ('users',)
depends_on = None


def upgrade() -> None:
    op.create_table('usuario_perfil',
        sa.Column('id_usuario', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('id_perfil', sa.Integer(), nullable=True),
        sa.Column('id_tarjeta_inteligente', sa.Integer(), nullable=True),
        sa.Column('id_delegacion', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id_usuario')
    )


def downgrade() -> None:
    op.drop_table('usuario_perfil')

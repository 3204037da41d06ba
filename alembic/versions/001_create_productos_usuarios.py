"""Create productos and usuarios tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the two back office tables.
       productos: catalogue rows, price must be positive.
       usuarios:  staff accounts, email is unique, password holds a bcrypt hash.
How:   Column names match an existing `tienda_ropa` schema so the back office
       can be pointed at a database created by the storefront.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "productos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("precio", sa.Numeric(10, 2), nullable=False),
        sa.Column("talla", sa.String(20), nullable=False, server_default=sa.text("''")),
        sa.Column("color", sa.String(30), nullable=False, server_default=sa.text("''")),
        sa.Column("categoria", sa.String(50), nullable=False, server_default=sa.text("''")),
        sa.Column("imagen", sa.String(255), nullable=True),
        sa.Column(
            "fecha_creacion",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("precio > 0", name="ck_productos_precio_positivo"),
    )

    # Listing is newest-first
    op.create_index(
        "idx_productos_fecha_creacion",
        "productos",
        [sa.text("fecha_creacion DESC")],
    )

    op.create_table(
        "usuarios",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre_completo", sa.String(150), nullable=False),
        sa.Column("email", sa.String(150), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column(
            "fecha_registro",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_usuarios_email"),
    )


def downgrade() -> None:
    """
    Drop both tables.

    WARNING: destroys every product and account. Prefer a forward migration
    on databases holding real data.
    """
    op.drop_table("usuarios")
    op.drop_index("idx_productos_fecha_creacion", table_name="productos")
    op.drop_table("productos")

"""Create areas table.

Revision ID: 3f1c2b9d7e10
Revises:
Create Date: 2024-03-11 10:42:17.118402
"""
import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "3f1c2b9d7e10"  # pragma: allowlist secret
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "areas",
        sa.Column("id", postgresql.UUID(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("application", sa.String(), nullable=False),
        sa.Column("geostore", sa.String(), nullable=True),
        sa.Column("geostore_data_api", sa.String(), nullable=True),
        sa.Column("wdpaid", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column(
            "use",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "env", sa.String(), server_default="production", nullable=False
        ),
        sa.Column(
            "iso",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "admin",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "datasets",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String()),
            server_default=sa.text("'{}'::varchar[]"),
            nullable=False,
        ),
        sa.Column("status", sa.String(), server_default="pending", nullable=False),
        sa.Column("public", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("webhook_url", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("subscription_id", sa.String(), nullable=True),
        sa.Column("language", sa.String(), server_default="en", nullable=False),
        sa.Column("template_id", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "areas_user_id_idx", "areas", ["user_id"], unique=False, postgresql_using="btree"
    )
    op.create_index(
        "areas_geostore_idx", "areas", ["geostore"], unique=False, postgresql_using="hash"
    )
    op.create_index(
        "areas_geostore_data_api_idx",
        "areas",
        ["geostore_data_api"],
        unique=False,
        postgresql_using="hash",
    )


def downgrade():
    op.drop_index("areas_geostore_data_api_idx", table_name="areas")
    op.drop_index("areas_geostore_idx", table_name="areas")
    op.drop_index("areas_user_id_idx", table_name="areas")
    op.drop_table("areas")

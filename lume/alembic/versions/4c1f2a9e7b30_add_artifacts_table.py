"""add_artifacts_table

Revision ID: 4c1f2a9e7b30
Revises:
Create Date: 2025-12-01 10:12:44.218113

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '4c1f2a9e7b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "artifacts",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("conversation_id", sa.Text(), nullable=False),
        sa.Column("message_id", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.Text(), nullable=True),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column(
            "content",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column(
            "version", sa.Text(), nullable=False, server_default="1"
        ),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("conversation_id", "message_id", "owner_id", "type",
                   "created_at"):
        op.create_index(
            op.f(f"ix_artifacts_{column}"),
            "artifacts",
            [column],
            unique=False,
        )


def downgrade():
    for column in ("created_at", "type", "owner_id", "message_id",
                   "conversation_id"):
        op.drop_index(op.f(f"ix_artifacts_{column}"), table_name="artifacts")
    op.drop_table("artifacts")

"""Initial schema - app_user, project, sheet, project_collaborator, column_permission.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("security_role", sa.String(20), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("last_seen_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "security_role IN ('ADMIN', 'COLLABORATOR')", name="ck_app_user_security_role"
        ),
    )

    op.create_table(
        "project",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )

    # Columns and rows are replaced together in one statement per save
    op.create_table(
        "sheet",
        sa.Column(
            "project_id",
            sa.UUID(),
            sa.ForeignKey("project.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("columns", JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("rows", JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "project_collaborator",
        sa.Column(
            "project_id",
            sa.UUID(),
            sa.ForeignKey("project.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.String(255),
            sa.ForeignKey("app_user.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_project_collaborator_user_id", "project_collaborator", ["user_id"])

    # At most one record per (project, collaborator); dropped with the membership
    op.create_table(
        "column_permission",
        sa.Column("project_id", sa.UUID(), primary_key=True),
        sa.Column("collaborator_id", sa.String(255), primary_key=True),
        sa.Column(
            "permissions", JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.ForeignKeyConstraint(
            ["project_id", "collaborator_id"],
            ["project_collaborator.project_id", "project_collaborator.user_id"],
            ondelete="CASCADE",
        ),
    )
    op.execute(
        "CREATE INDEX ix_column_permission_permissions ON column_permission "
        "USING gin (permissions jsonb_path_ops)"
    )


def downgrade() -> None:
    op.drop_index("ix_column_permission_permissions", table_name="column_permission")
    op.drop_table("column_permission")
    op.drop_index("ix_project_collaborator_user_id", table_name="project_collaborator")
    op.drop_table("project_collaborator")
    op.drop_table("sheet")
    op.drop_table("project")
    op.drop_table("app_user")

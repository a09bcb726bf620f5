"""Initial schema: units, roles, permissions, users, tasks, change requests; seed catalog

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

from app.domain.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    PERMISSION_DESCRIPTIONS,
    ROLE_NAMES,
    PermissionCode,
)
from app.shared.utils.generators import generate_cuid

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create schema and seed the default role/permission catalog."""
    op.create_table(
        "organizational_unit",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(
        op.f("ix_organizational_unit_code"), "organizational_unit", ["code"], unique=True
    )

    op.create_table(
        "role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("code IN ('STANDARD', 'SUPERVISOR')", name="role_code_check"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "permission",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "role_permission",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("permission_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["role.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["permission_id"], ["permission.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
    )
    op.create_index(
        op.f("ix_role_permission_role_id"), "role_permission", ["role_id"], unique=False
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organizational_unit_id", sa.String(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["organizational_unit_id"], ["organizational_unit.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["role_id"], ["role.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(
        op.f("ix_app_user_organizational_unit_id"),
        "app_user",
        ["organizational_unit_id"],
        unique=False,
    )
    op.create_index(op.f("ix_app_user_role_id"), "app_user", ["role_id"], unique=False)
    op.create_index(
        "ix_app_user_unit_active", "app_user", ["organizational_unit_id", "is_active"]
    )

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organizational_unit_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), server_default="PENDING", nullable=False),
        sa.Column("priority", sa.String(length=16), server_default="MEDIUM", nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by_user_id", sa.String(), nullable=False),
        sa.Column("approved_by_user_id", sa.String(), nullable=False),
        sa.Column("assigned_to_user_id", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('PENDING', 'IN_PROGRESS', 'COMPLETED')", name="task_status_check"
        ),
        sa.CheckConstraint(
            "priority IN ('LOW', 'MEDIUM', 'HIGH')", name="task_priority_check"
        ),
        sa.ForeignKeyConstraint(
            ["organizational_unit_id"], ["organizational_unit.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["app_user.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["approved_by_user_id"], ["app_user.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["assigned_to_user_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_task_organizational_unit_id"), "task", ["organizational_unit_id"], unique=False
    )
    op.create_index("ix_task_unit_active", "task", ["organizational_unit_id", "is_active"])
    op.create_index(
        "ix_task_assigned", "task", ["organizational_unit_id", "assigned_to_user_id"]
    )

    op.create_table(
        "task_change_request",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organizational_unit_id", sa.String(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=True),
        sa.Column("requested_by_user_id", sa.String(), nullable=False),
        sa.Column("change_type", sa.String(length=16), nullable=False),
        sa.Column("status", sa.String(length=16), server_default="PENDING", nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column(
            "payload",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "requested_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by_user_id", sa.String(), nullable=True),
        sa.Column("review_comment", sa.Text(), nullable=True),
        sa.CheckConstraint(
            "change_type IN ('CREATE', 'UPDATE', 'COMPLETE', 'DELETE')",
            name="task_change_request_type_check",
        ),
        sa.CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')",
            name="task_change_request_status_check",
        ),
        sa.CheckConstraint(
            "task_id IS NOT NULL OR change_type = 'CREATE'",
            name="task_change_request_task_required_check",
        ),
        sa.ForeignKeyConstraint(
            ["organizational_unit_id"], ["organizational_unit.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["task_id"], ["task.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["requested_by_user_id"], ["app_user.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["reviewed_by_user_id"], ["app_user.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_task_change_request_organizational_unit_id"),
        "task_change_request",
        ["organizational_unit_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_task_change_request_task_id"), "task_change_request", ["task_id"], unique=False
    )
    op.create_index(
        op.f("ix_task_change_request_requested_by_user_id"),
        "task_change_request",
        ["requested_by_user_id"],
        unique=False,
    )
    op.create_index(
        "ix_task_change_request_unit_status",
        "task_change_request",
        ["organizational_unit_id", "status"],
    )

    _seed_catalog()


def _seed_catalog() -> None:
    permission_table = sa.table(
        "permission",
        sa.column("id", sa.String),
        sa.column("code", sa.String),
        sa.column("description", sa.Text),
    )
    role_table = sa.table(
        "role",
        sa.column("id", sa.String),
        sa.column("code", sa.String),
        sa.column("name", sa.String),
    )
    role_permission_table = sa.table(
        "role_permission",
        sa.column("id", sa.String),
        sa.column("role_id", sa.String),
        sa.column("permission_id", sa.String),
    )

    permission_ids = {code: generate_cuid() for code in PermissionCode}
    role_ids = {role: generate_cuid() for role in ROLE_NAMES}

    op.bulk_insert(
        permission_table,
        [
            {"id": pid, "code": code.value, "description": PERMISSION_DESCRIPTIONS[code]}
            for code, pid in permission_ids.items()
        ],
    )
    op.bulk_insert(
        role_table,
        [
            {"id": rid, "code": role.value, "name": ROLE_NAMES[role]}
            for role, rid in role_ids.items()
        ],
    )
    op.bulk_insert(
        role_permission_table,
        [
            {
                "id": generate_cuid(),
                "role_id": role_ids[role],
                "permission_id": permission_ids[code],
            }
            for role, codes in DEFAULT_ROLE_PERMISSIONS.items()
            for code in sorted(codes, key=lambda c: c.value)
        ],
    )


def downgrade() -> None:
    """Drop all tables (catalog rows go with them)."""
    op.drop_table("task_change_request")
    op.drop_table("task")
    op.drop_table("app_user")
    op.drop_table("role_permission")
    op.drop_table("permission")
    op.drop_table("role")
    op.drop_table("organizational_unit")

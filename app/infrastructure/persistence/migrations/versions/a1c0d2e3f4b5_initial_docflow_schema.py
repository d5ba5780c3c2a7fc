"""initial docflow schema

Revision ID: a1c0d2e3f4b5
Revises:
Create Date: 2026-10-17

Users, departments, documents with versions and comments, per-document
workflow and tasks, audit log (append-only, enforced by trigger),
notifications, offices with messages and sessions.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "a1c0d2e3f4b5"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_JSONB = postgresql.JSONB(astext_type=sa.Text())


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _trigger_function_audit_log() -> str:
    """Return SQL for trigger function that blocks audit_log UPDATE/DELETE."""
    return """
    CREATE OR REPLACE FUNCTION prevent_audit_log_mutation()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
        RAISE EXCEPTION 'audit_log rows are append-only and cannot be updated or deleted'
            USING ERRCODE = 'integrity_constraint_violation';
    END;
    $$
    """


def upgrade() -> None:
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("profile_image_url", sa.String(), nullable=True),
        sa.Column("roles", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column(
            "departments", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")
        ),
        sa.Column("office_id", sa.String(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_app_user_email", "app_user", ["email"])
    op.create_index("ix_app_user_office_id", "app_user", ["office_id"])

    op.create_table(
        "department",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("members", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("owner_uid", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="DRAFT"),
        sa.Column("current_version_id", sa.String(), nullable=True),
        sa.Column("tags", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "participants", _JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")
        ),
        sa.Column("acl", _JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("version_counter", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["department_id"], ["department.id"], ondelete="SET NULL"
        ),
        sa.CheckConstraint(
            "status IN ('DRAFT', 'IN_REVIEW', 'PENDING_SIGNATURE', 'APPROVED', "
            "'REJECTED', 'ARCHIVED')",
            name="ck_document_status",
        ),
    )
    op.create_index("ix_document_owner_uid", "document", ["owner_uid"])
    op.create_index("ix_document_department_id", "document", ["department_id"])
    op.create_index("ix_document_status_updated", "document", ["status", "updated_at"])

    op.create_table(
        "document_version",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("doc_id", sa.String(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("version_number", sa.String(length=32), nullable=False),
        sa.Column("storage_path", sa.String(), nullable=False),
        sa.Column("sha256", sa.String(length=64), nullable=False),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(length=255), nullable=True),
        sa.Column("change_summary", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["doc_id"], ["document.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_document_version_doc_id", "document_version", ["doc_id"])
    op.create_index(
        "ux_document_version_sequence",
        "document_version",
        ["doc_id", "sequence"],
        unique=True,
    )

    op.create_table(
        "comment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("doc_id", sa.String(), nullable=False),
        sa.Column("author_uid", sa.String(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["doc_id"], ["document.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_comment_doc_id", "comment", ["doc_id"])

    op.create_table(
        "workflow",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("doc_id", sa.String(), nullable=False),
        sa.Column("state", sa.String(length=32), nullable=False, server_default="DRAFT"),
        sa.Column("assignees", _JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("history", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["doc_id"], ["document.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("doc_id"),
        sa.CheckConstraint(
            "state IN ('DRAFT', 'REVIEW', 'SIGN', 'APPROVAL', 'DONE', 'REJECTED')",
            name="ck_workflow_state",
        ),
    )

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("doc_id", sa.String(), nullable=False),
        sa.Column("workflow_id", sa.String(), nullable=False),
        sa.Column("state", sa.String(length=32), nullable=False, server_default="OPEN"),
        sa.Column(
            "assigned_to", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")
        ),
        sa.Column("done_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["doc_id"], ["document.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="CASCADE"),
        sa.CheckConstraint("type IN ('REVIEW', 'SIGN', 'APPROVE')", name="ck_task_type"),
        sa.CheckConstraint(
            "state IN ('OPEN', 'DONE', 'CANCELLED')", name="ck_task_state"
        ),
    )
    op.create_index("ix_task_doc_id", "task", ["doc_id"])
    op.create_index("ix_task_workflow_id", "task", ["workflow_id"])
    op.create_index("ix_task_state", "task", ["state"])
    op.create_index(
        "ix_task_assigned_to_gin", "task", ["assigned_to"], postgresql_using="gin"
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("actor_uid", sa.String(), nullable=False),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("target_type", sa.String(length=32), nullable=False),
        sa.Column("target_id", sa.String(), nullable=False),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("ip", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("diff", _JSONB, nullable=True),
        sa.Column("metadata", _JSONB, nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_log_actor_uid", "audit_log", ["actor_uid"])
    op.create_index(
        "ix_audit_log_target", "audit_log", ["target_type", "target_id", "timestamp"]
    )
    op.execute(_trigger_function_audit_log())
    op.execute(
        "CREATE TRIGGER prevent_audit_log_update_delete "
        "BEFORE UPDATE OR DELETE ON audit_log "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_audit_log_mutation()"
    )

    op.create_table(
        "notification",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("to_uid", sa.String(), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("payload", _JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notification_to_uid_read", "notification", ["to_uid", "read"])

    op.create_table(
        "office",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("office_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("office_code", sa.String(length=64), nullable=False),
        sa.Column("office_password_hash", sa.String(), nullable=False),
        sa.Column("head_user_id", sa.String(), nullable=True),
        sa.Column(
            "admin_users", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")
        ),
        sa.Column("members", _JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("department_id", sa.String(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("office_id"),
        sa.UniqueConstraint("office_code"),
    )

    op.create_table(
        "office_message",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("sender_user_id", sa.String(), nullable=False),
        sa.Column("message_type", sa.String(length=32), nullable=False),
        sa.Column("target_office_id", sa.String(length=64), nullable=True),
        sa.Column("is_read", _JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="normal"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_office_message_target", "office_message", ["target_office_id", "created_at"]
    )
    op.create_index("ix_office_message_type", "office_message", ["message_type"])

    op.create_table(
        "office_session",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("office_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column(
            "login_time",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token_hash"),
    )
    op.create_index("ix_office_session_office_id", "office_session", ["office_id"])
    op.create_index("ix_office_session_expires_at", "office_session", ["expires_at"])


def downgrade() -> None:
    op.drop_table("office_session")
    op.drop_table("office_message")
    op.drop_table("office")
    op.drop_table("notification")
    op.execute("DROP TRIGGER IF EXISTS prevent_audit_log_update_delete ON audit_log")
    op.execute("DROP FUNCTION IF EXISTS prevent_audit_log_mutation()")
    op.drop_table("audit_log")
    op.drop_table("task")
    op.drop_table("workflow")
    op.drop_table("comment")
    op.drop_table("document_version")
    op.drop_table("document")
    op.drop_table("department")
    op.drop_table("app_user")

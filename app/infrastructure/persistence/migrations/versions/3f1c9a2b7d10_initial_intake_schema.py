"""initial_intake_schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "token",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_token_token"),
    )
    op.create_index("ix_token_created_at", "token", ["created_at"])

    op.create_table(
        "department",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_department_name"),
    )
    op.create_index("ix_department_created_at", "department", ["created_at"])

    op.create_table(
        "token_department",
        sa.Column("token_id", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("token_id", "department_id"),
        sa.ForeignKeyConstraint(["token_id"], ["token.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["department_id"], ["department.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_token_department_department_id", "token_department", ["department_id"]
    )

    op.create_table(
        "category",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "notes_required", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_category_name"),
    )
    op.create_index("ix_category_created_at", "category", ["created_at"])

    op.create_table(
        "process",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column(
            "process_number",
            sa.BigInteger(),
            sa.Identity(always=True),
            nullable=False,
        ),
        sa.Column("token_id", sa.String(), nullable=False),
        sa.Column("category_id", sa.String(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("process_number", name="uq_process_process_number"),
        sa.ForeignKeyConstraint(["token_id"], ["token.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_process_token_id", "process", ["token_id"])
    op.create_index("ix_process_category_id", "process", ["category_id"])
    op.create_index("ix_process_created_at", "process", ["created_at"])

    op.create_table(
        "upload",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("process_id", sa.String(), nullable=False),
        sa.Column("file_path", sa.String(length=1024), nullable=False),
        sa.Column("mime_type", sa.String(length=255), nullable=True),
        sa.Column("size", sa.BigInteger(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("file_path", name="uq_upload_file_path"),
        sa.ForeignKeyConstraint(["process_id"], ["process.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_upload_process_id", "upload", ["process_id"])
    op.create_index("ix_upload_created_at", "upload", ["created_at"])

    op.create_table(
        "admin_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_admin_user_email"),
    )
    op.create_index("ix_admin_user_created_at", "admin_user", ["created_at"])

    op.execute(_start_process_function())
    op.execute(_add_upload_function())


def _start_process_function() -> str:
    """Token check, category check and insert in one statement.

    IT401: unknown or inactive token. IT404: unknown category.
    IT422: category requires a note and none was given.
    """
    return """
    CREATE OR REPLACE FUNCTION start_process(
        p_id text, p_token text, p_category_id text, p_note text
    )
    RETURNS process
    LANGUAGE plpgsql
    AS $$
    DECLARE
        v_token_id text;
        v_active boolean;
        v_notes_required boolean;
        v_note text := NULLIF(btrim(p_note), '');
        v_row process;
    BEGIN
        SELECT t.id, t.active INTO v_token_id, v_active
        FROM token t WHERE t.token = p_token;
        IF v_token_id IS NULL OR NOT v_active THEN
            RAISE EXCEPTION 'invalid or inactive token' USING ERRCODE = 'IT401';
        END IF;

        SELECT c.notes_required INTO v_notes_required
        FROM category c WHERE c.id = p_category_id;
        IF NOT FOUND THEN
            RAISE EXCEPTION 'unknown category' USING ERRCODE = 'IT404';
        END IF;
        IF v_notes_required AND v_note IS NULL THEN
            RAISE EXCEPTION 'note required for category' USING ERRCODE = 'IT422';
        END IF;

        INSERT INTO process (id, token_id, category_id, note)
        VALUES (p_id, v_token_id, p_category_id, v_note)
        RETURNING * INTO v_row;
        RETURN v_row;
    END;
    $$
    """


def _add_upload_function() -> str:
    """Insert one upload row. IT404: process does not exist."""
    return """
    CREATE OR REPLACE FUNCTION add_upload(
        p_id text, p_process_id text, p_file_path text, p_mime text, p_size bigint
    )
    RETURNS upload
    LANGUAGE plpgsql
    AS $$
    DECLARE
        v_row upload;
    BEGIN
        PERFORM 1 FROM process p WHERE p.id = p_process_id;
        IF NOT FOUND THEN
            RAISE EXCEPTION 'unknown process' USING ERRCODE = 'IT404';
        END IF;

        INSERT INTO upload (id, process_id, file_path, mime_type, size)
        VALUES (p_id, p_process_id, p_file_path, p_mime, p_size)
        RETURNING * INTO v_row;
        RETURN v_row;
    END;
    $$
    """


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP FUNCTION IF EXISTS add_upload(text, text, text, text, bigint)")
    op.execute("DROP FUNCTION IF EXISTS start_process(text, text, text, text)")
    op.drop_table("admin_user")
    op.drop_table("upload")
    op.drop_table("process")
    op.drop_table("category")
    op.drop_table("token_department")
    op.drop_table("department")
    op.drop_table("token")

"""004: create user_roles table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE user_roles (
            user_id     UUID        NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            role        VARCHAR(32) NOT NULL,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            PRIMARY KEY (user_id, role),
            CONSTRAINT ck_user_roles_role CHECK (role IN ('admin'))
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_roles CASCADE;")

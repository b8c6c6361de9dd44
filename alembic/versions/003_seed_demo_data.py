"""003: seed demo users and cash cards

Revision ID: 003
Revises: 002
Create Date: 2026-10-19

Passwords are hashed at upgrade time so no hash is committed to the repo.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from src.cc_gateway.auth.password import hash_password

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_USERS = [
    ("sarah1", "abc123", "CARD-OWNER"),
    ("kumar2", "xyz789", "CARD-OWNER"),
    ("hank-owns-no-cards", "qrs456", "NON-OWNER"),
]


def upgrade() -> None:
    conn = op.get_bind()
    for username, password, role in _USERS:
        conn.execute(
            sa.text(
                "INSERT INTO users (username, password_hash, role) "
                "VALUES (:username, :password_hash, :role)"
            ),
            {"username": username, "password_hash": hash_password(password), "role": role},
        )

    op.execute("""
        INSERT INTO cash_card (id, amount_cents, owner) VALUES
            (99,  12345, 'sarah1'),
            (100,   100, 'sarah1'),
            (101, 15000, 'sarah1'),
            (102, 20000, 'kumar2');
    """)
    # Explicit ids bypass BIGSERIAL; move the sequence past them
    op.execute("""
        SELECT setval(pg_get_serial_sequence('cash_card', 'id'),
                      (SELECT MAX(id) FROM cash_card));
    """)


def downgrade() -> None:
    op.execute("DELETE FROM cash_card WHERE id IN (99, 100, 101, 102);")
    op.execute(
        "DELETE FROM users WHERE username IN ('sarah1', 'kumar2', 'hank-owns-no-cards');"
    )

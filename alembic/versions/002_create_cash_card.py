"""002: create cash_card table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE cash_card (
            id              BIGSERIAL       PRIMARY KEY,
            amount_cents    BIGINT          NOT NULL,
            owner           VARCHAR(256)    NOT NULL
        );
    """)
    # Every query filters by owner
    op.execute("CREATE INDEX ix_cash_card_owner ON cash_card (owner);")
    op.execute("COMMENT ON COLUMN cash_card.amount_cents IS 'amount in cents; wire format is amount/100';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS cash_card CASCADE;")

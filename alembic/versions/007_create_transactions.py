"""007: create transactions table

Revision ID: 007
Revises: 006
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id          BIGSERIAL       PRIMARY KEY,
            user_id     VARCHAR(64)     NOT NULL REFERENCES accounts (user_id),
            kind        VARCHAR(20)     NOT NULL,
            amount_usd  BIGINT          NOT NULL DEFAULT 0,
            amount_btc  BIGINT          NOT NULL DEFAULT 0,
            bet_id      UUID            REFERENCES bets (id),
            note        VARCHAR(500),
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_kind CHECK (
                kind IN ('deposit', 'withdrawal', 'bet_stake', 'bet_payout', 'adjustment')
            ),
            CONSTRAINT ck_transactions_one_currency CHECK (
                (amount_usd <> 0 AND amount_btc = 0) OR (amount_btc <> 0 AND amount_usd = 0)
            )
        );
    """)
    op.execute("CREATE INDEX idx_transactions_user ON transactions (user_id, id DESC);")
    op.execute("CREATE INDEX idx_transactions_bet ON transactions (bet_id) WHERE bet_id IS NOT NULL;")
    op.execute("""
        CREATE TRIGGER trg_transactions_append_only
            BEFORE UPDATE OR DELETE ON transactions
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)
    op.execute("COMMENT ON TABLE transactions IS 'Append-only ledger; signed amounts in minor units';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")

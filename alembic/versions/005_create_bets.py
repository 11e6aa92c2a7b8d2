"""005: create bets table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bets (
            id                      UUID        PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id                 VARCHAR(64) NOT NULL REFERENCES accounts (user_id),
            bet_type                VARCHAR(10) NOT NULL,
            status                  VARCHAR(10) NOT NULL DEFAULT 'pending',
            stake_usd               BIGINT      NOT NULL DEFAULT 0,
            stake_btc               BIGINT      NOT NULL DEFAULT 0,
            potential_payout_usd    BIGINT      NOT NULL DEFAULT 0,
            potential_payout_btc    BIGINT      NOT NULL DEFAULT 0,
            payout_usd              BIGINT,
            payout_btc              BIGINT,
            created_at              TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at              TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            settled_at              TIMESTAMPTZ,
            CONSTRAINT ck_bets_type CHECK (bet_type IN ('single', 'parlay')),
            CONSTRAINT ck_bets_status CHECK (
                status IN ('pending', 'approved', 'rejected', 'won', 'lost', 'void')
            ),
            CONSTRAINT ck_bets_one_stake_currency CHECK (
                (stake_usd > 0 AND stake_btc = 0) OR (stake_btc > 0 AND stake_usd = 0)
            ),
            CONSTRAINT ck_bets_payout_matches_stake CHECK (
                (stake_usd > 0 AND potential_payout_btc = 0 AND COALESCE(payout_btc, 0) = 0)
                OR (stake_btc > 0 AND potential_payout_usd = 0 AND COALESCE(payout_usd, 0) = 0)
            )
        );
    """)
    op.execute("CREATE INDEX idx_bets_user_time ON bets (user_id, created_at DESC, id DESC);")
    op.execute("CREATE INDEX idx_bets_status_time ON bets (status, created_at DESC, id DESC);")
    op.execute("""
        CREATE TRIGGER trg_bets_updated_at
            BEFORE UPDATE ON bets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")

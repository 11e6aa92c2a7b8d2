"""006: create bet_selections table

Revision ID: 006
Revises: 005
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bet_selections (
            id          BIGSERIAL       PRIMARY KEY,
            bet_id      UUID            NOT NULL REFERENCES bets (id) ON DELETE CASCADE,
            leg_index   SMALLINT        NOT NULL,
            event_id    VARCHAR(128)    NOT NULL,
            league      VARCHAR(128)    NOT NULL DEFAULT '',
            event_label VARCHAR(256)    NOT NULL DEFAULT '',
            market      VARCHAR(10)     NOT NULL,
            outcome     VARCHAR(10)     NOT NULL,
            odds        INTEGER         NOT NULL,
            CONSTRAINT uq_bet_selections_leg UNIQUE (bet_id, leg_index),
            CONSTRAINT ck_bet_selections_market CHECK (market IN ('moneyline', 'spread', 'total')),
            CONSTRAINT ck_bet_selections_outcome CHECK (
                outcome IN ('home', 'away', 'draw', 'over', 'under')
            ),
            CONSTRAINT ck_bet_selections_odds_nonzero CHECK (odds <> 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_bet_selections_immutable
            BEFORE UPDATE ON bet_selections
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bet_selections CASCADE;")

"""allow_uncertain_news_status

Revision ID: b4d82f61e0a7
Revises: 7c1e4a2b9d30
Create Date: 2026-10-02 16:41:09.502113

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = 'b4d82f61e0a7'
down_revision: Union[str, Sequence[str], None] = '7c1e4a2b9d30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Widen the news status check so verification can store 'uncertain'."""
    with op.batch_alter_table('news') as batch_op:
        batch_op.drop_constraint('ck_news_status', type_='check')
        batch_op.create_check_constraint(
            'ck_news_status',
            "status IN ('pending', 'true', 'false', 'uncertain')"
        )


def downgrade() -> None:
    """Restore the three-value status check; uncertain rows fall back to pending."""
    op.execute("UPDATE news SET status = 'pending' WHERE status = 'uncertain'")
    with op.batch_alter_table('news') as batch_op:
        batch_op.drop_constraint('ck_news_status', type_='check')
        batch_op.create_check_constraint(
            'ck_news_status',
            "status IN ('pending', 'true', 'false')"
        )

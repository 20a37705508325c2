"""add user_answers

Revision ID: 4f2a9c1d7e30
Revises: base_0001
Create Date: 2026-09-21 18:47:52.090114

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e30"
down_revision: Union[str, Sequence[str], None] = "base_0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user_answers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("game_date", sa.Date(), nullable=False),
        sa.Column("user_answer", sa.Text(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["question_id"],
            ["questions.id"],
            name="fk_user_answers_question_id_questions",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_user_answers"),
        # one answer per user, question and day; duplicates mean "already answered"
        sa.UniqueConstraint(
            "user_id", "question_id", "game_date", name="uq_user_answers_user_question_date"
        ),
    )
    op.create_index("ix_user_answers_user_date", "user_answers", ["user_id", "game_date"])


def downgrade() -> None:
    op.drop_index("ix_user_answers_user_date", table_name="user_answers")
    op.drop_table("user_answers")

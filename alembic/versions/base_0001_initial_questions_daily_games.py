"""initial schema: questions and daily games

Revision ID: base_0001
Revises:
Create Date: 2026-09-14 10:12:03.418211

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "base_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "questions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("difficulty", sa.String(length=32), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_questions"),
    )
    op.create_table(
        "daily_games",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("game_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_daily_games"),
    )
    op.create_index("ix_daily_games_game_date", "daily_games", ["game_date"], unique=True)
    op.create_table(
        "daily_questions",
        sa.Column("daily_game_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(
            ["daily_game_id"],
            ["daily_games.id"],
            name="fk_daily_questions_daily_game_id_daily_games",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["question_id"],
            ["questions.id"],
            name="fk_daily_questions_question_id_questions",
        ),
        sa.PrimaryKeyConstraint("daily_game_id", "position", name="pk_daily_questions"),
        sa.UniqueConstraint(
            "daily_game_id", "question_id", name="uq_daily_questions_game_question"
        ),
    )


def downgrade() -> None:
    op.drop_table("daily_questions")
    op.drop_index("ix_daily_games_game_date", table_name="daily_games")
    op.drop_table("daily_games")
    op.drop_table("questions")

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import List

import sqlalchemy as sa
from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db import Base


class Question(Base):
    __tablename__ = "questions"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    prompt: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(120))
    difficulty: Mapped[str] = mapped_column(String(32))
    answer: Mapped[str] = mapped_column(Text)


class DailyGame(Base):
    __tablename__ = "daily_games"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # one game per calendar date; losers of a creation race hit this constraint
    game_date: Mapped[date] = mapped_column(Date, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )
    questions: Mapped[List["DailyQuestion"]] = relationship(
        back_populates="game",
        order_by="DailyQuestion.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class DailyQuestion(Base):
    __tablename__ = "daily_questions"
    __table_args__ = (
        sa.UniqueConstraint("daily_game_id", "question_id", name="uq_daily_questions_game_question"),
    )
    daily_game_id: Mapped[int] = mapped_column(
        ForeignKey("daily_games.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    question_id: Mapped[str] = mapped_column(ForeignKey("questions.id"))

    game: Mapped[DailyGame] = relationship(back_populates="questions")


class UserAnswer(Base):
    __tablename__ = "user_answers"
    __table_args__ = (
        sa.UniqueConstraint(
            "user_id", "question_id", "game_date", name="uq_user_answers_user_question_date"
        ),
        sa.Index("ix_user_answers_user_date", "user_id", "game_date"),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128))
    question_id: Mapped[str] = mapped_column(ForeignKey("questions.id"))
    game_date: Mapped[date] = mapped_column(Date)
    user_answer: Mapped[str] = mapped_column(Text)
    is_correct: Mapped[bool] = mapped_column(Boolean)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )

"""
Record store for questions, daily games and user answers.

``TriviaStore`` is the interface the game manager depends on. ``SqlTriviaStore``
implements it on SQLAlchemy. Rows are converted into the frozen pydantic
records from ``schemas.records`` before they leave this module, so callers
never see ORM objects or untyped dicts.

Failure mapping:
  - unique-key conflicts  -> DuplicateRecord
  - other integrity errors (foreign key, not null) -> InvalidRecord
  - other database errors -> StoreUnavailable
  - rows that fail record validation -> InvalidRecord
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional, Protocol, Sequence

from pydantic import ValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from errors import DuplicateRecord, InvalidRecord, StoreUnavailable
from models import DailyGame, DailyQuestion, Question, UserAnswer
from schemas.records import DailyGameRecord, QuestionRecord, UserAnswerRecord

logger = logging.getLogger("daily-trivia.store")


class TriviaStore(Protocol):
    def find_daily_game(self, game_date: date) -> Optional[DailyGameRecord]: ...

    def insert_daily_game(self, game: DailyGameRecord) -> DailyGameRecord: ...

    def find_question(self, question_id: str) -> Optional[QuestionRecord]: ...

    def insert_question(self, question: QuestionRecord) -> QuestionRecord: ...

    def list_questions(self, category: Optional[str] = None) -> List[QuestionRecord]: ...

    def count_questions(self) -> int: ...

    def list_random_questions(self, limit: int) -> List[QuestionRecord]: ...

    def find_answers(
        self, user_id: str, question_ids: Sequence[str], game_date: date
    ) -> List[UserAnswerRecord]: ...

    def insert_answer(self, answer: UserAnswerRecord) -> UserAnswerRecord: ...

    def delete_answers(self, user_id: str, question_ids: Sequence[str], game_date: date) -> int: ...


def _to_game(row: DailyGame) -> DailyGameRecord:
    try:
        return DailyGameRecord(
            game_date=row.game_date, question_ids=[dq.question_id for dq in row.questions]
        )
    except ValidationError as e:
        raise InvalidRecord(f"daily game {row.game_date} failed validation", {"errors": e.errors()})


def _to_question(row: Question) -> QuestionRecord:
    try:
        return QuestionRecord.model_validate(row)
    except ValidationError as e:
        raise InvalidRecord(f"question {row.id!r} failed validation", {"errors": e.errors()})


def _to_answer(row: UserAnswer) -> UserAnswerRecord:
    try:
        return UserAnswerRecord.model_validate(row)
    except ValidationError as e:
        raise InvalidRecord(f"answer {row.id} failed validation", {"errors": e.errors()})


# SQLSTATE for unique_violation; SQLite has no sqlstate and says so in the message
_UNIQUE_SQLSTATE = "23505"


def _is_unique_violation(e: IntegrityError) -> bool:
    orig = e.orig
    if getattr(orig, "sqlstate", None) == _UNIQUE_SQLSTATE:
        return True
    if getattr(orig, "pgcode", None) == _UNIQUE_SQLSTATE:
        return True
    return "UNIQUE constraint failed" in str(orig)


class SqlTriviaStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._session_factory() as db:
            try:
                yield db
            except IntegrityError as e:
                db.rollback()
                if _is_unique_violation(e):
                    raise DuplicateRecord("record already exists", {"error": str(e.orig)}) from e
                logger.warning("integrity error: %s", e.orig)
                raise InvalidRecord("record violates a constraint", {"error": str(e.orig)}) from e
            except SQLAlchemyError as e:
                db.rollback()
                logger.warning("store call failed: %s: %s", type(e).__name__, e)
                raise StoreUnavailable(f"store_error: {type(e).__name__}") from e

    # ---------- daily games ----------

    def find_daily_game(self, game_date: date) -> Optional[DailyGameRecord]:
        with self._session() as db:
            row = db.execute(
                select(DailyGame).where(DailyGame.game_date == game_date)
            ).scalar_one_or_none()
            return _to_game(row) if row else None

    def insert_daily_game(self, game: DailyGameRecord) -> DailyGameRecord:
        # game row and its question rows commit together or not at all
        with self._session() as db:
            row = DailyGame(game_date=game.game_date)
            row.questions = [
                DailyQuestion(position=i, question_id=qid)
                for i, qid in enumerate(game.question_ids)
            ]
            db.add(row)
            db.commit()
            return _to_game(row)

    # ---------- questions ----------

    def find_question(self, question_id: str) -> Optional[QuestionRecord]:
        with self._session() as db:
            row = db.get(Question, question_id)
            return _to_question(row) if row else None

    def insert_question(self, question: QuestionRecord) -> QuestionRecord:
        with self._session() as db:
            row = Question(**question.model_dump())
            db.add(row)
            db.commit()
            return _to_question(row)

    def list_questions(self, category: Optional[str] = None) -> List[QuestionRecord]:
        with self._session() as db:
            stmt = select(Question).order_by(Question.id)
            if category:
                stmt = stmt.where(Question.category == category)
            return [_to_question(q) for q in db.execute(stmt).scalars()]

    def count_questions(self) -> int:
        with self._session() as db:
            return db.execute(select(func.count()).select_from(Question)).scalar_one()

    def list_random_questions(self, limit: int) -> List[QuestionRecord]:
        with self._session() as db:
            stmt = select(Question).order_by(func.random()).limit(limit)
            return [_to_question(q) for q in db.execute(stmt).scalars()]

    # ---------- answers ----------

    def find_answers(
        self, user_id: str, question_ids: Sequence[str], game_date: date
    ) -> List[UserAnswerRecord]:
        if not question_ids:
            return []
        with self._session() as db:
            stmt = select(UserAnswer).where(
                UserAnswer.user_id == user_id,
                UserAnswer.game_date == game_date,
                UserAnswer.question_id.in_(list(question_ids)),
            )
            return [_to_answer(a) for a in db.execute(stmt).scalars()]

    def insert_answer(self, answer: UserAnswerRecord) -> UserAnswerRecord:
        with self._session() as db:
            row = UserAnswer(
                user_id=answer.user_id,
                question_id=answer.question_id,
                game_date=answer.game_date,
                user_answer=answer.submitted_text,
                is_correct=answer.is_correct,
            )
            if answer.submitted_at is not None:
                row.submitted_at = answer.submitted_at
            db.add(row)
            db.commit()
            return _to_answer(row)

    def delete_answers(self, user_id: str, question_ids: Sequence[str], game_date: date) -> int:
        if not question_ids:
            return 0
        with self._session() as db:
            result = db.execute(
                delete(UserAnswer).where(
                    UserAnswer.user_id == user_id,
                    UserAnswer.game_date == game_date,
                    UserAnswer.question_id.in_(list(question_ids)),
                )
            )
            db.commit()
            return result.rowcount or 0

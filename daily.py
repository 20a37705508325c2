"""
Daily game lifecycle: one fixed question set per calendar date, per-user
progress against it, answer submission, reset, and unlimited batches.

The manager keeps no state of its own. Everything is read from and written
to the ``TriviaStore`` passed in at construction.
"""

from __future__ import annotations

import logging
import random
from datetime import UTC, date, datetime
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from errors import (
    DailyGameNotFound,
    DuplicateRecord,
    PoolTooSmall,
    QuestionNotFound,
    QuestionNotInGame,
    ResetPartialFailure,
    StoreUnavailable,
)
from grader import grade
from schemas.records import DailyGameRecord, QuestionRecord, UserAnswerRecord
from store import TriviaStore

logger = logging.getLogger("daily-trivia.daily")

DEFAULT_GAME_SIZE = 9
DEFAULT_BATCH_SIZE = 12


def utc_today() -> date:
    # matches the client's ISO date (UTC), not the server's local zone
    return datetime.now(UTC).date()


class SubmissionResult(BaseModel):
    is_correct: bool
    # only set when the submission is wrong
    correct_answer: Optional[str] = None
    already_answered: bool = False


class ProgressStats(BaseModel):
    game_date: date
    answered_count: int
    correct_count: int
    total_questions: int
    completed: bool


def summarize(game: DailyGameRecord, progress: Dict[str, UserAnswerRecord]) -> ProgressStats:
    total = len(game.question_ids)
    answers = [progress[qid] for qid in game.question_ids if qid in progress]
    answered = len(answers)
    return ProgressStats(
        game_date=game.game_date,
        answered_count=answered,
        correct_count=sum(1 for a in answers if a.is_correct),
        total_questions=total,
        completed=total > 0 and answered == total,
    )


def _result_for(is_correct: bool, answer: str, already_answered: bool = False) -> SubmissionResult:
    return SubmissionResult(
        is_correct=is_correct,
        correct_answer=None if is_correct else answer,
        already_answered=already_answered,
    )


class DailyGameManager:
    def __init__(
        self,
        store: TriviaStore,
        *,
        game_size: int = DEFAULT_GAME_SIZE,
        batch_size: int = DEFAULT_BATCH_SIZE,
        today: Callable[[], date] = utc_today,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store
        self.game_size = game_size
        self.batch_size = batch_size
        self._today = today
        self._rng = rng or random.Random()

    def today(self) -> date:
        return self._today()

    # ---------- daily game ----------

    def get_daily_game(self, game_date: date) -> DailyGameRecord:
        game = self.store.find_daily_game(game_date)
        if game is None:
            raise DailyGameNotFound(game_date)
        return game

    def ensure_daily_game(self, game_date: date) -> DailyGameRecord:
        """
        Return the game for ``game_date``, creating it on first use.

        The store's unique key on the date decides concurrent first callers:
        whoever loses the insert re-reads and gets the winner's game.
        """
        existing = self.store.find_daily_game(game_date)
        if existing is not None:
            return existing

        question_ids = self._pick_question_ids(self.game_size)
        try:
            game = self.store.insert_daily_game(
                DailyGameRecord(game_date=game_date, question_ids=question_ids)
            )
        except DuplicateRecord:
            logger.info("daily game for %s created concurrently; re-reading", game_date)
            winner = self.store.find_daily_game(game_date)
            if winner is None:
                # conflict without a visible row means the store is misbehaving
                raise StoreUnavailable(f"daily game for {game_date} conflicted but is missing")
            return winner

        logger.info("created daily game for %s with %d questions", game_date, len(question_ids))
        return game

    def questions_for(self, game: DailyGameRecord) -> List[QuestionRecord]:
        # in the game's stored order
        return [self._question(qid) for qid in game.question_ids]

    def _pick_question_ids(self, n: int) -> List[str]:
        pool = [q.id for q in self.store.list_questions()]
        if len(pool) < n:
            raise PoolTooSmall(len(pool), n)
        return self._rng.sample(pool, n)

    # ---------- progress ----------

    def get_user_progress(self, game_date: date, user_id: str) -> Dict[str, UserAnswerRecord]:
        game = self.get_daily_game(game_date)
        answers = self.store.find_answers(user_id, game.question_ids, game_date)
        return {a.question_id: a for a in answers}

    def progress_stats(self, game_date: date, user_id: str) -> ProgressStats:
        game = self.get_daily_game(game_date)
        answers = self.store.find_answers(user_id, game.question_ids, game_date)
        return summarize(game, {a.question_id: a for a in answers})

    # ---------- answers ----------

    def _question(self, question_id: str) -> QuestionRecord:
        q = self.store.find_question(question_id)
        if q is None:
            raise QuestionNotFound(question_id)
        return q

    def submit_answer(
        self,
        question_id: str,
        submitted_text: str,
        user_id: str,
        game_date: Optional[date] = None,
    ) -> SubmissionResult:
        """
        Grade and record one answer. Only questions in that day's game can be
        answered. Answers are final for the day: a repeat submission (sequential
        or racing) returns the stored result instead.
        """
        game_date = game_date or self.today()
        game = self.get_daily_game(game_date)
        question = self._question(question_id)
        if question_id not in game.question_ids:
            raise QuestionNotInGame(question_id, game_date)

        prior = self.store.find_answers(user_id, [question_id], game_date)
        if prior:
            return _result_for(prior[0].is_correct, question.answer, already_answered=True)

        is_correct = grade(submitted_text, question.answer)
        try:
            self.store.insert_answer(
                UserAnswerRecord(
                    user_id=user_id,
                    question_id=question_id,
                    game_date=game_date,
                    submitted_text=submitted_text.strip(),
                    is_correct=is_correct,
                    submitted_at=datetime.now(UTC),
                )
            )
        except DuplicateRecord:
            logger.info("duplicate answer from %s for %s on %s", user_id, question_id, game_date)
            prior = self.store.find_answers(user_id, [question_id], game_date)
            if not prior:
                raise
            return _result_for(prior[0].is_correct, question.answer, already_answered=True)

        return _result_for(is_correct, question.answer)

    def check_answer(self, question_id: str, submitted_text: str) -> SubmissionResult:
        """Grade without recording anything (unlimited mode)."""
        question = self._question(question_id)
        return _result_for(grade(submitted_text, question.answer), question.answer)

    # ---------- reset ----------

    def reset_user_progress(self, game_date: date, user_id: str) -> int:
        game = self.get_daily_game(game_date)
        try:
            deleted = self.store.delete_answers(user_id, game.question_ids, game_date)
        except StoreUnavailable as e:
            logger.warning("reset for %s on %s failed: %s", user_id, game_date, e)
            raise ResetPartialFailure(
                "Could not clear saved answers; progress was reset for this session only.",
                {"date": str(game_date)},
            ) from e
        logger.info("reset %d answers for %s on %s", deleted, user_id, game_date)
        return deleted

    # ---------- unlimited ----------

    def fetch_unlimited_batch(self) -> List[QuestionRecord]:
        # independent draw each call; repeats across batches are fine
        return self.store.list_random_questions(self.batch_size)

# routers/daily.py
from __future__ import annotations

import logging
from datetime import date
from typing import Annotated, Dict, Optional

from fastapi import APIRouter, Depends, Query

from daily import DailyGameManager, ProgressStats, summarize
from deps.services import get_manager, get_settings
from errors import ResetPartialFailure
from grader import normalize
from schemas.daily import (
    USER_ID_MAX,
    AnswerRequest,
    AnswerResponse,
    DailyQuestionOut,
    DailyTriviaResponse,
    ResetRequest,
)
from schemas.records import DailyGameRecord, UserAnswerRecord
from settings import Settings

logger = logging.getLogger("daily-trivia.api")

router = APIRouter(prefix="/daily", tags=["daily"])

LEN_LIMIT = 200

Manager = Annotated[DailyGameManager, Depends(get_manager)]
UserId = Annotated[str, Query(min_length=1, max_length=USER_ID_MAX)]


def validate_answer_text(s: Optional[str]) -> Optional[str]:
    # punctuation-only input normalizes to nothing and would lock the question
    if s is None or not normalize(s):
        return "Answer required."
    if len(s) > LEN_LIMIT:
        return f"Answer too long (> {LEN_LIMIT})."
    return None


def _todays_game(manager: DailyGameManager, settings: Settings) -> DailyGameRecord:
    today = manager.today()
    if settings.daily_autocreate:
        return manager.ensure_daily_game(today)
    return manager.get_daily_game(today)


def _view(
    manager: DailyGameManager,
    game: DailyGameRecord,
    progress: Dict[str, UserAnswerRecord],
    warning: Optional[str] = None,
) -> DailyTriviaResponse:
    questions = []
    for q in manager.questions_for(game):
        a = progress.get(q.id)
        questions.append(
            DailyQuestionOut(
                id=q.id,
                category=q.category,
                prompt=q.prompt,
                difficulty=q.difficulty,
                is_answered=a is not None,
                user_answer=a.submitted_text if a else None,
                is_correct=a.is_correct if a else None,
            )
        )
    return DailyTriviaResponse(
        ok=True,
        game_date=game.game_date,
        questions=questions,
        stats=summarize(game, progress),
        warning=warning,
    )


@router.get("", response_model=DailyTriviaResponse)
def daily_trivia(
    manager: Manager,
    settings: Annotated[Settings, Depends(get_settings)],
    user_id: UserId,
):
    game = _todays_game(manager, settings)
    progress = manager.get_user_progress(game.game_date, user_id)
    return _view(manager, game, progress)


@router.get("/progress", response_model=ProgressStats)
def daily_progress(manager: Manager, user_id: UserId, game_date: Optional[date] = None):
    return manager.progress_stats(game_date or manager.today(), user_id)


@router.post("/answers", response_model=AnswerResponse)
def submit_answer(req: AnswerRequest, manager: Manager):
    msg = validate_answer_text(req.answer)
    if msg:
        return {"ok": False, "feedback": msg}
    res = manager.submit_answer(req.question_id, req.answer, req.user_id)
    feedback = "You already answered this question today." if res.already_answered else None
    return {"ok": True, **res.model_dump(), "feedback": feedback}


@router.post("/reset", response_model=DailyTriviaResponse)
def reset_progress(req: ResetRequest, manager: Manager):
    today = manager.today()
    game = manager.get_daily_game(today)
    try:
        manager.reset_user_progress(today, req.user_id)
    except ResetPartialFailure as e:
        # Saved answers are untouched; hand back a clean board for this session.
        logger.warning("degraded reset for %s: %s", req.user_id, e.message)
        return _view(manager, game, {}, warning=e.message)
    return _view(manager, game, manager.get_user_progress(today, req.user_id))

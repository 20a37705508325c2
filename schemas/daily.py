# schemas/daily.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from daily import ProgressStats

USER_ID_MAX = 128

# ---------- Questions with progress ----------


class DailyQuestionOut(BaseModel):
    id: str
    category: str
    prompt: str
    difficulty: str
    is_answered: bool = False
    user_answer: Optional[str] = None
    is_correct: Optional[bool] = None


class DailyTriviaResponse(BaseModel):
    ok: bool
    game_date: date
    questions: List[DailyQuestionOut]
    stats: ProgressStats
    # set only when a reset could not reach the store
    warning: Optional[str] = None


# ---------- Submit ----------


class AnswerRequest(BaseModel):
    question_id: str = Field(min_length=1)
    answer: str
    user_id: str = Field(min_length=1, max_length=USER_ID_MAX)


class UnlimitedAnswerRequest(BaseModel):
    question_id: str = Field(min_length=1)
    answer: str


class AnswerResponse(BaseModel):
    ok: bool
    is_correct: bool = False
    correct_answer: Optional[str] = None
    already_answered: bool = False
    feedback: Optional[str] = None


# ---------- Reset ----------


class ResetRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=USER_ID_MAX)


# ---------- Admin ----------


class EnsureGameRequest(BaseModel):
    game_date: Optional[date] = None


class EnsureGameResponse(BaseModel):
    ok: bool
    game_date: date
    question_ids: List[str]

# Validated record shapes that cross the store boundary.
from __future__ import annotations

from datetime import date, datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuestionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)
    id: str = Field(min_length=1, max_length=64)
    prompt: str = Field(min_length=1)
    category: str
    difficulty: str
    answer: str


class DailyGameRecord(BaseModel):
    model_config = ConfigDict(frozen=True)
    game_date: date
    question_ids: List[str]

    @field_validator("question_ids")
    @classmethod
    def _distinct(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("daily game question ids must be distinct")
        return v


class UserAnswerRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True, populate_by_name=True)
    user_id: str = Field(min_length=1, max_length=128)
    question_id: str
    game_date: date
    submitted_text: str = Field(validation_alias="user_answer")
    is_correct: bool
    submitted_at: datetime | None = None

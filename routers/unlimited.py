# routers/unlimited.py
from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends

from daily import DailyGameManager
from deps.services import get_manager
from routers.daily import validate_answer_text
from schemas.daily import AnswerResponse, UnlimitedAnswerRequest
from schemas.questions import QuestionOut

router = APIRouter(prefix="/unlimited", tags=["unlimited"])

Manager = Annotated[DailyGameManager, Depends(get_manager)]


@router.get("/batch", response_model=List[QuestionOut])
def unlimited_batch(manager: Manager):
    # fresh draw every call; nothing is stored
    return [QuestionOut.model_validate(q) for q in manager.fetch_unlimited_batch()]


@router.post("/answers", response_model=AnswerResponse)
def check_unlimited_answer(req: UnlimitedAnswerRequest, manager: Manager):
    msg = validate_answer_text(req.answer)
    if msg:
        return {"ok": False, "feedback": msg}
    res = manager.check_answer(req.question_id, req.answer)
    return {"ok": True, **res.model_dump()}

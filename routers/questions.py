from __future__ import annotations

import random as _rnd
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from deps.services import get_store
from errors import QuestionNotFound
from schemas.questions import QuestionOut
from store import TriviaStore

router = APIRouter(tags=["questions"])


@router.get("/questions", response_model=List[QuestionOut])
def list_questions(
    store: Annotated[TriviaStore, Depends(get_store)],
    category: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    random: bool = Query(default=False, description="If true, shuffle before limiting"),
):
    # materialize once so we can shuffle/limit deterministically
    qs = store.list_questions(category=category)

    if random:
        _rnd.shuffle(qs)

    if limit is not None:
        qs = qs[:limit]

    return [QuestionOut.model_validate(q) for q in qs]


@router.get("/questions/{qid}", response_model=QuestionOut)
def get_question_detail(qid: str, store: Annotated[TriviaStore, Depends(get_store)]):
    q = store.find_question(qid)
    if q is None:
        raise QuestionNotFound(qid)
    return QuestionOut.model_validate(q)

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends

from bank import load_into
from daily import DailyGameManager
from deps.auth import require_admin
from deps.services import get_manager, get_settings, get_store
from schemas.daily import EnsureGameRequest, EnsureGameResponse
from settings import Settings
from store import TriviaStore

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/reload")
def reload_questions(
    store: Annotated[TriviaStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    added = load_into(store, Path(settings.questions_dir))
    return {"ok": True, "added": added, "count": store.count_questions()}


@router.post("/daily", response_model=EnsureGameResponse)
def ensure_daily(
    manager: Annotated[DailyGameManager, Depends(get_manager)],
    req: EnsureGameRequest | None = None,
):
    game_date = (req.game_date if req else None) or manager.today()
    game = manager.ensure_daily_game(game_date)
    return {"ok": True, "game_date": game.game_date, "question_ids": game.question_ids}

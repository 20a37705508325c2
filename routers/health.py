# routers/health.py
import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import Engine, func, select, text

from alembic.config import Config
from alembic.script import ScriptDirectory
from daily import DailyGameManager
from deps.services import get_engine, get_manager
from models import DailyGame

logger = logging.getLogger("daily-trivia.health")

router = APIRouter(prefix="/health", tags=["health"])

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"

EngineDep = Annotated[Engine, Depends(get_engine)]


@router.get("/db")
def health_db(engine: EngineDep, manager: Annotated[DailyGameManager, Depends(get_manager)]):
    """Round-trip the database and read the daily_games table the game lives in."""
    today = manager.today()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            n_games = conn.execute(select(func.count()).select_from(DailyGame)).scalar_one()
            has_today = (
                conn.execute(select(DailyGame.id).where(DailyGame.game_date == today)).first()
                is not None
            )
    except Exception as e:
        logger.warning("db health check failed: %s: %s", type(e).__name__, e)
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")
    return {"ok": True, "daily_games": n_games, "game_date": today, "todays_game": has_today}


def _alembic_heads() -> list[str]:
    cfg = Config(str(ALEMBIC_INI))
    script = ScriptDirectory.from_config(cfg)
    return list(script.get_heads())


@router.get("/migrations")
def health_migrations(engine: EngineDep):
    heads: list[str] = []
    db_ver = None
    try:
        heads = _alembic_heads()
    except Exception as e:
        logger.warning("could not read alembic heads: %s", e)

    try:
        with engine.connect() as conn:
            try:
                db_ver = conn.execute(
                    text("SELECT version_num FROM alembic_version")
                ).scalar_one_or_none()
            except Exception:
                # no alembic_version table: schema was created without migrations
                db_ver = None
    except Exception as e:
        return {
            "ok": False,
            "error": f"db_connect_failed: {e}",
            "code_heads": heads,
            "db_version": db_ver,
        }

    synced = (db_ver in heads) if heads else False
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bank import load_into
from daily import DailyGameManager
from db import Base, make_engine, make_session_factory
from errors import TriviaError

# Routers
from routers.admin import router as admin_router
from routers.daily import router as daily_router
from routers.health import router as health_router
from routers.questions import router as questions_router
from routers.unlimited import router as unlimited_router
from settings import Settings, load_settings
from store import SqlTriviaStore

logger = logging.getLogger("daily-trivia")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if settings.create_schema:
        Base.metadata.create_all(app.state.engine)
        logger.info("schema created on %s", app.state.engine.url.render_as_string())
    if settings.seed_on_startup:
        load_into(app.state.store, Path(settings.questions_dir))
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Daily Trivia API", lifespan=lifespan)

    # one engine/store/manager per process, handed to routes via deps.services
    engine = make_engine(settings.database_url)
    store = SqlTriviaStore(make_session_factory(engine))
    app.state.settings = settings
    app.state.engine = engine
    app.state.store = store
    app.state.manager = DailyGameManager(
        store,
        game_size=settings.daily_game_size,
        batch_size=settings.unlimited_batch_size,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*", "x-admin-token"],
    )

    @app.exception_handler(TriviaError)
    async def trivia_error_handler(request: Request, exc: TriviaError):
        level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        logger.log(level, "%s %s -> %s: %s", request.method, request.url.path, exc.code, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.get("/")
    def health_root():
        return {"ok": True}

    app.include_router(daily_router)  # /daily, /daily/answers, /daily/progress, /daily/reset
    app.include_router(unlimited_router)  # /unlimited/...
    app.include_router(questions_router)  # /questions/...
    app.include_router(admin_router)  # /admin/...
    app.include_router(health_router)  # /health/...
    return app


app = create_app()

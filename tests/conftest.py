import random
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from daily import DailyGameManager
from db import Base, make_engine, make_session_factory
from main import create_app
from schemas.records import DailyGameRecord, QuestionRecord
from settings import Settings
from store import SqlTriviaStore

ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data" / "questions"
GAME_DAY = date(2024, 1, 1)

# Q1..Q20; the first few carry answers the grading tests lean on
_ANSWERS = {
    "Q1": "Bananas",
    "Q2": "The Eiffel Tower",
    "Q3": "Paris",
    "Q4": "Café",
}


def make_pool() -> list[QuestionRecord]:
    return [
        QuestionRecord(
            id=f"Q{i}",
            prompt=f"Question number {i}?",
            category="General",
            difficulty=("easy", "medium", "hard")[i % 3],
            answer=_ANSWERS.get(f"Q{i}", f"Answer {i}"),
        )
        for i in range(1, 21)
    ]


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'trivia.db'}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    s = SqlTriviaStore(make_session_factory(engine))
    for q in make_pool():
        s.insert_question(q)
    return s


@pytest.fixture
def manager(store):
    return DailyGameManager(store, today=lambda: GAME_DAY, rng=random.Random(7))


@pytest.fixture
def fixed_game(store):
    # Q1..Q9 on GAME_DAY, so the known answers above are in play
    return store.insert_daily_game(
        DailyGameRecord(game_date=GAME_DAY, question_ids=[f"Q{i}" for i in range(1, 10)])
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'api.db'}",
        admin_token="secret",
        create_schema=True,
        seed_on_startup=True,
        questions_dir=str(DATA_DIR),
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
